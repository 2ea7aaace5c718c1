import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fittrack.core.errors import InvalidValue, NotFound, UserNotFound
from fittrack.models.ids import next_record_id
from fittrack.models.workout import DEFAULT_INTENSITY, UPDATABLE_FIELDS, new_workout
from fittrack.services.validation import (
    coerce_id,
    coerce_number,
    is_negative,
    parse_timestamp,
    require,
    utc_now_iso,
)
from fittrack.storage.json_store import Document, JsonDocumentStore

logger = logging.getLogger(__name__)

WORKOUT_NOT_FOUND_MESSAGE = "Workout not found"

# Workouts with an unreadable date sort after every dated one
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _user_exists(document: Document, user_id: int) -> bool:
    return any(u.get("id") == user_id for u in document["users"])


def _check_amounts(duration: Any, calories: Any) -> None:
    if is_negative(duration) or is_negative(calories):
        raise InvalidValue("Duration and calories cannot be negative")


def _check_date(date: Any) -> None:
    if parse_timestamp(date) is None:
        raise InvalidValue("date must be an ISO-8601 timestamp")


def _find_index(document: Document, workout_id: Optional[int]) -> Optional[int]:
    if workout_id is None:
        return None
    return next((i for i, w in enumerate(document["workouts"]) if w.get("id") == workout_id), None)


class WorkoutService:
    @staticmethod
    def list_workouts(store: JsonDocumentStore, user_id: Any) -> List[Dict[str, Any]]:
        """Workouts for one user, most recent date first"""
        require("userId required", user_id)
        owner = coerce_id(user_id)
        if owner is None:
            raise InvalidValue("userId must be a number")

        document = store.snapshot()
        workouts = [w for w in document["workouts"] if w.get("userId") == owner]
        # sorted() is stable, so same-date workouts keep insertion order
        return sorted(
            workouts,
            key=lambda w: parse_timestamp(w.get("date")) or _OLDEST,
            reverse=True,
        )

    @staticmethod
    def create_workout(
        store: JsonDocumentStore,
        user_id: Any,
        workout_type: Optional[str],
        duration: Any = None,
        calories: Any = None,
        date: Optional[str] = None,
        notes: Optional[str] = None,
        intensity: Optional[str] = None,
    ) -> Dict[str, Any]:
        require("Missing required fields", user_id, workout_type)
        _check_amounts(duration, calories)
        if date:
            _check_date(date)

        owner = coerce_id(user_id)
        with store.transaction() as document:
            if owner is None or not _user_exists(document, owner):
                raise UserNotFound("User ID not found")

            created = utc_now_iso()
            workout = new_workout(
                workout_id=next_record_id(document["workouts"]),
                user_id=owner,
                workout_type=workout_type.strip(),
                duration=coerce_number(duration),
                calories=coerce_number(calories),
                date=date or created,
                notes=notes.strip() if notes else "",
                intensity=intensity or DEFAULT_INTENSITY,
                created=created,
            )
            document["workouts"].append(workout)

        logger.info(f"Created workout {workout['id']} for user {owner}")
        return workout

    @staticmethod
    def update_workout(
        store: JsonDocumentStore,
        workout_id: Any,
        updates: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Shallow-merge the provided fields over an existing workout.

        An unknown id is reported before any field problem. Provided fields
        then go through the same checks as on creation. The id always stays
        the path id and the creation timestamp never changes.
        """
        workout_id = coerce_id(workout_id)
        changes = {key: value for key, value in updates.items() if key in UPDATABLE_FIELDS}

        with store.transaction() as document:
            index = _find_index(document, workout_id)
            if index is None:
                raise NotFound(WORKOUT_NOT_FOUND_MESSAGE)

            if "type" in changes:
                if not isinstance(changes["type"], str) or not changes["type"].strip():
                    raise InvalidValue("Workout type cannot be empty")
                changes["type"] = changes["type"].strip()
            if "notes" in changes:
                changes["notes"] = changes["notes"].strip() if changes["notes"] else ""
            if "intensity" in changes:
                changes["intensity"] = changes["intensity"] or DEFAULT_INTENSITY
            if "date" in changes:
                _check_date(changes["date"])
            _check_amounts(changes.get("duration"), changes.get("calories"))
            for name in ("duration", "calories"):
                if name in changes:
                    changes[name] = coerce_number(changes[name])

            if "userId" in changes:
                owner = coerce_id(changes["userId"])
                if owner is None or not _user_exists(document, owner):
                    raise UserNotFound("User ID not found")
                changes["userId"] = owner

            workout = {**document["workouts"][index], **changes}
            workout["id"] = workout_id
            document["workouts"][index] = workout

        logger.info(f"Updated workout {workout_id}")
        return workout

    @staticmethod
    def delete_workout(store: JsonDocumentStore, workout_id: Any) -> None:
        # Ids that are not numbers match nothing and end up as NotFound
        workout_id = coerce_id(workout_id)
        with store.transaction() as document:
            remaining = [w for w in document["workouts"] if w.get("id") != workout_id]
            if len(remaining) == len(document["workouts"]):
                raise NotFound()
            document["workouts"] = remaining

        logger.info(f"Deleted workout {workout_id}")


workout_service = WorkoutService()
