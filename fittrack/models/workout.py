from typing import Any, Dict

# Fields a client may change on an existing workout
# id and timestamp are owned by the server
UPDATABLE_FIELDS = ("userId", "type", "duration", "calories", "date", "notes", "intensity")

DEFAULT_INTENSITY = "medium"


def new_workout(
    workout_id: int,
    user_id: int,
    workout_type: str,
    duration: int | float,
    calories: int | float,
    date: str,
    notes: str,
    intensity: str,
    created: str,
) -> Dict[str, Any]:
    return {
        "id": workout_id,
        "userId": user_id,
        "type": workout_type,
        "duration": duration,
        "calories": calories,
        "date": date,
        "notes": notes,
        "intensity": intensity,
        "timestamp": created,
    }
