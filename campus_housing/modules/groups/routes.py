from fastapi import APIRouter, Depends
from campus_housing.database.supabase_client import get_supabase
from campus_housing.modules.groups.schemas import GroupCreate, GroupResponse, GroupMembershipResponse
from campus_housing.modules.groups.service import GroupService
from campus_housing.modules.profiles.schemas import ProfileResponse
from campus_housing.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(supabase: Client = Depends(get_supabase)) -> GroupService:
    return GroupService(supabase)


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(
    group_data: GroupCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Create a new group; the creator joins it"""
    return service.create_group(group_data, current_user["id"])


@router.post("/leave", response_model=GroupMembershipResponse)
async def leave_group(
    current_user: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Leave the current group"""
    service.leave_group(current_user["id"])
    return GroupMembershipResponse(user_id=current_user["id"], group_id=None, message="Left group")


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Get group by ID"""
    return service.get_group(group_id)


@router.post("/{group_id}/join", response_model=GroupMembershipResponse)
async def join_group(
    group_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Join an existing group (replaces any current membership)"""
    service.join_group(group_id, current_user["id"])
    return GroupMembershipResponse(user_id=current_user["id"], group_id=group_id, message="Joined group")


@router.get("/{group_id}/members", response_model=List[ProfileResponse])
async def list_members(
    group_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """List all members of a group"""
    return service.get_group_members(group_id)
