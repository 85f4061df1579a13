from fastapi import APIRouter, Depends
from campus_housing.database.supabase_client import get_supabase
from campus_housing.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from campus_housing.modules.auth.service import AuthService
from campus_housing.modules.profiles.service import ProfileService
from campus_housing.core.dependencies import get_auth_service, get_current_token, get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new student or landlord"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user and their profile (for frontend UI)."""
    profile = ProfileService(supabase).get_profile(current_user["id"])
    return {**current_user, "profile": profile.model_dump(mode="json") if profile else None}
