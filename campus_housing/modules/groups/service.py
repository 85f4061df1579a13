import logging
from supabase import Client
from campus_housing.modules.groups.schemas import GroupCreate, GroupResponse
from campus_housing.modules.profiles.schemas import ProfileResponse
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _set_profile_group(self, user_id: str, group_id):
        result = self.supabase.table("profiles")\
            .update({"group_id": group_id})\
            .eq("id", user_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")

    def create_group(self, group_data: GroupCreate, user_id: str) -> GroupResponse:
        """Create a new group and move the creator into it"""
        try:
            result = self.supabase.table("groups").insert({
                "name": group_data.name,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create group")

            group = result.data[0]
            self._set_profile_group(user_id, group["id"])
            logger.info(f"User {user_id} created group {group['id']}")

            return GroupResponse(**group)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_group(self, group_id: str) -> GroupResponse:
        """Get group by ID"""
        try:
            result = self.supabase.table("groups")\
                .select("*")\
                .eq("id", group_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Group not found")

            return GroupResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def join_group(self, group_id: str, user_id: str):
        """Point the user's profile at an existing group"""
        try:
            self.get_group(group_id)
            self._set_profile_group(user_id, group_id)
            logger.info(f"User {user_id} joined group {group_id}")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def leave_group(self, user_id: str):
        """Clear the user's group membership"""
        try:
            self._set_profile_group(user_id, None)
            logger.info(f"User {user_id} left their group")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_group_members(self, group_id: str) -> List[ProfileResponse]:
        """List all profiles in a group"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("group_id", group_id)\
                .execute()

            return [ProfileResponse(**member) for member in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
