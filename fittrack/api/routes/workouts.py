from fastapi import APIRouter, Depends, Query, Response, status
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from fittrack.core.database import get_store
from fittrack.services.workout_service import workout_service
from fittrack.storage.json_store import JsonDocumentStore

router = APIRouter(prefix="/workouts", tags=["workouts"])

Number = Union[int, float]


class WorkoutCreate(BaseModel):
    user_id: Any = Field(None, alias="userId")
    type: Optional[str] = None
    # Non-numeric amounts are coerced to 0 by the service, so accept anything here
    duration: Any = None
    calories: Any = None
    date: Optional[str] = None
    notes: Optional[str] = None
    intensity: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class WorkoutUpdate(BaseModel):
    user_id: Any = Field(None, alias="userId")
    type: Optional[str] = None
    duration: Any = None
    calories: Any = None
    date: Optional[str] = None
    notes: Optional[str] = None
    intensity: Optional[str] = None

    # id/timestamp in the body are dropped - the server owns both
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WorkoutResponse(BaseModel):
    id: int
    user_id: int = Field(alias="userId")
    type: str
    duration: Number = 0
    calories: Number = 0
    date: Optional[str] = None
    notes: Optional[str] = ""
    intensity: Optional[str] = "medium"
    timestamp: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


@router.get("", response_model=List[WorkoutResponse])
async def list_workouts(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: JsonDocumentStore = Depends(get_store)
):
    """List a user's workouts, most recent first"""
    return workout_service.list_workouts(store, user_id)


@router.post("", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(workout: WorkoutCreate, store: JsonDocumentStore = Depends(get_store)):
    """Log a workout"""
    return workout_service.create_workout(
        store,
        user_id=workout.user_id,
        workout_type=workout.type,
        duration=workout.duration,
        calories=workout.calories,
        date=workout.date,
        notes=workout.notes,
        intensity=workout.intensity,
    )


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: str,
    updates: WorkoutUpdate,
    store: JsonDocumentStore = Depends(get_store)
):
    """Edit a workout - only the fields present in the body change"""
    return workout_service.update_workout(
        store,
        workout_id,
        updates.model_dump(by_alias=True, exclude_unset=True),
    )


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(workout_id: str, store: JsonDocumentStore = Depends(get_store)):
    """Delete a workout"""
    workout_service.delete_workout(store, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
