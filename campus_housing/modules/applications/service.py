import logging
from supabase import Client
from campus_housing.modules.applications.schemas import (
    ApplicationCreate, ApplicationResponse, ApplicationStatus,
    ApplicationWithListingResponse, ApplicationWithApplicantResponse
)
from typing import List
from datetime import datetime, timezone
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_application(self, application_data: ApplicationCreate, applicant_id: str) -> ApplicationResponse:
        """Submit a pending application for a listing, optionally on behalf of a group"""
        try:
            # Verify listing exists
            listing_result = self.supabase.table("listings")\
                .select("id")\
                .eq("id", application_data.listing_id)\
                .maybe_single()\
                .execute()

            if not listing_result or not listing_result.data:
                raise HTTPException(status_code=404, detail="Listing not found")

            result = self.supabase.table("applications").insert({
                "listing_id": application_data.listing_id,
                "applicant_id": applicant_id,
                "group_id": application_data.group_id,
                "message": application_data.message,
                "status": "pending"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create application")

            logger.info(
                f"User {applicant_id} applied to listing {application_data.listing_id}"
                f" (group={application_data.group_id})"
            )
            return ApplicationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_my_applications(self, applicant_id: str) -> List[ApplicationWithListingResponse]:
        """Applications submitted by the user, with the listing embedded"""
        try:
            result = self.supabase.table("applications")\
                .select("*, listings(*)")\
                .eq("applicant_id", applicant_id)\
                .order("created_at", desc=True)\
                .execute()

            return [ApplicationWithListingResponse(**app) for app in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_applications_for_listing(self, listing_id: str) -> List[ApplicationWithApplicantResponse]:
        """Applications for one listing, with the applicant profile embedded"""
        try:
            result = self.supabase.table("applications")\
                .select("*, profiles(*)")\
                .eq("listing_id", listing_id)\
                .order("created_at", desc=True)\
                .execute()

            return [ApplicationWithApplicantResponse(**app) for app in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_applications_for_landlord(self, landlord_id: str) -> List[ApplicationWithApplicantResponse]:
        """Applications across all of a landlord's listings"""
        try:
            result = self.supabase.table("applications")\
                .select("*, listings!inner(*), profiles(*)")\
                .eq("listings.landlord_id", landlord_id)\
                .order("created_at", desc=True)\
                .execute()

            return [ApplicationWithApplicantResponse(**app) for app in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_application_status(self, application_id: str, status: ApplicationStatus) -> ApplicationResponse:
        """Accept, reject or reset an application"""
        try:
            result = self.supabase.table("applications")\
                .update({
                    "status": status,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", application_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Application not found")

            logger.info(f"Application {application_id} marked {status}")
            return ApplicationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_application(self, application_id: str) -> bool:
        """Withdraw an application"""
        try:
            result = self.supabase.table("applications")\
                .delete()\
                .eq("id", application_id)\
                .execute()

            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
