from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

ApplicationStatus = Literal["pending", "accepted", "rejected"]


class ApplicationCreate(BaseModel):
    listing_id: str
    group_id: Optional[str] = None
    message: str = ""


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationResponse(BaseModel):
    id: str
    listing_id: str
    applicant_id: str
    group_id: Optional[str] = None
    status: ApplicationStatus
    message: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationWithListingResponse(ApplicationResponse):
    listings: Optional[dict] = None  # Embedded listing row


class ApplicationWithApplicantResponse(ApplicationResponse):
    listings: Optional[dict] = None  # Present on the landlord-wide view
    profiles: Optional[dict] = None  # Embedded applicant profile
