from typing import Any, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from fittrack.api.routes.auth import UserResponse
from fittrack.core.database import get_store
from fittrack.services.account_service import account_service
from fittrack.storage.json_store import JsonDocumentStore

router = APIRouter(tags=["profile"])


class ProfileUpdate(BaseModel):
    user_id: Any = Field(None, alias="userId")
    age: Any = None
    weight: Any = None
    height: Any = None
    goal_weight: Any = Field(None, alias="goalWeight")
    daily_calorie_goal: Any = Field(None, alias="dailyCalorieGoal")
    activity_level: Optional[str] = Field(None, alias="activityLevel")

    # Any other profile field is merged as sent
    model_config = ConfigDict(populate_by_name=True, extra="allow")


@router.put("/profile", response_model=UserResponse)
async def update_profile(profile: ProfileUpdate, store: JsonDocumentStore = Depends(get_store)):
    """Merge the given fields into the user's profile"""
    fields = profile.model_dump(by_alias=True, exclude_unset=True)
    return account_service.update_profile(store, profile.user_id, fields)
