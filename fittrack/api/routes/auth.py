from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from fittrack.core.database import get_store
from fittrack.services.account_service import account_service
from fittrack.storage.json_store import JsonDocumentStore

router = APIRouter(tags=["auth"])


# Presence and format checks live in the service so they map onto the
# MissingField / InvalidDomain / WeakPassword errors instead of a generic 422
class UserCreate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")

    model_config = ConfigDict(populate_by_name=True)


class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = Field("", alias="fullName")
    joined_date: Optional[str] = Field(None, alias="joinedDate")
    profile: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, store: JsonDocumentStore = Depends(get_store)):
    """Register a new user"""
    return account_service.register(
        store,
        username=user_data.username,
        password=user_data.password,
        full_name=user_data.full_name,
    )


@router.post("/login", response_model=UserResponse)
async def login(credentials: UserLogin, store: JsonDocumentStore = Depends(get_store)):
    """Check credentials and return the user - no token is issued"""
    return account_service.authenticate(
        store,
        username=credentials.username,
        password=credentials.password,
    )
