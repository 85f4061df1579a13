from fastapi import APIRouter, Depends
from campus_housing.database.supabase_client import get_supabase
from campus_housing.modules.applications.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse,
    ApplicationWithListingResponse, ApplicationWithApplicantResponse
)
from campus_housing.modules.applications.service import ApplicationService
from campus_housing.core.dependencies import (
    get_current_user_id, require_landlord, check_listing_owner,
    check_application_landlord, check_application_applicant
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/applications", tags=["applications"])


def get_application_service(supabase: Client = Depends(get_supabase)) -> ApplicationService:
    return ApplicationService(supabase)


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    application_data: ApplicationCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    """Apply to a listing, alone or with a group"""
    return service.create_application(application_data, current_user["id"])


@router.get("/mine", response_model=List[ApplicationWithListingResponse])
async def list_my_applications(
    current_user: Dict = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    """Applications submitted by the authenticated user"""
    return service.get_my_applications(current_user["id"])


@router.get("/received", response_model=List[ApplicationWithApplicantResponse])
async def list_received_applications(
    landlord: Dict = Depends(require_landlord),
    service: ApplicationService = Depends(get_application_service)
):
    """Applications across all listings of the authenticated landlord"""
    return service.get_applications_for_landlord(landlord["id"])


@router.get("/listing/{listing_id}", response_model=List[ApplicationWithApplicantResponse])
async def list_listing_applications(
    listing_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
    supabase: Client = Depends(get_supabase)
):
    """Applications for one listing (owning landlord only)"""
    check_listing_owner(listing_id, current_user, supabase)
    return service.get_applications_for_listing(listing_id)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    status_data: ApplicationStatusUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
    supabase: Client = Depends(get_supabase)
):
    """Accept or reject an application (landlord of the listing only)"""
    check_application_landlord(application_id, current_user, supabase)
    return service.update_application_status(application_id, status_data.status)


@router.delete("/{application_id}", status_code=204)
async def delete_application(
    application_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
    supabase: Client = Depends(get_supabase)
):
    """Withdraw an application (applicant only)"""
    check_application_applicant(application_id, current_user, supabase)
    service.delete_application(application_id)
    return None
