"""
Core dependencies for route protection and ownership checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from campus_housing.database.supabase_client import get_supabase
from campus_housing.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_current_profile(
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> Dict[str, Any]:
    """Profile row of the authenticated user"""
    result = supabase.table("profiles")\
        .select("*")\
        .eq("id", user_data["id"])\
        .maybe_single()\
        .execute()
    if not result or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return result.data


def require_landlord(profile: Dict = Depends(get_current_profile)) -> Dict[str, Any]:
    """Allow only landlord profiles"""
    if not profile.get("is_landlord"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only landlords can manage listings"
        )
    return profile


def check_listing_owner(listing_id: str, user_data: dict, supabase: Client) -> Dict[str, Any]:
    """Return the listing if the user is its landlord, else 404/403"""
    result = supabase.table("listings")\
        .select("id, landlord_id")\
        .eq("id", listing_id)\
        .maybe_single()\
        .execute()
    if not result or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Listing not found"
        )
    if result.data.get("landlord_id") != user_data["id"]:
        logger.warning(f"User {user_data['id']} denied access to listing {listing_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be the landlord of this listing"
        )
    return result.data


def check_application_landlord(application_id: str, user_data: dict, supabase: Client) -> Dict[str, Any]:
    """Return the application if the user owns the listing it targets"""
    result = supabase.table("applications")\
        .select("id, listing_id, applicant_id")\
        .eq("id", application_id)\
        .maybe_single()\
        .execute()
    if not result or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found"
        )
    check_listing_owner(result.data["listing_id"], user_data, supabase)
    return result.data


def check_application_applicant(application_id: str, user_data: dict, supabase: Client) -> Dict[str, Any]:
    """Return the application if the user submitted it"""
    result = supabase.table("applications")\
        .select("id, listing_id, applicant_id")\
        .eq("id", application_id)\
        .maybe_single()\
        .execute()
    if not result or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found"
        )
    if result.data.get("applicant_id") != user_data["id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only withdraw your own applications"
        )
    return result.data
