from typing import Any, Dict

# Users are stored as plain dicts inside the JSON document
# Keys are camelCase because the document and the API share one shape

PROFILE_NUMERIC_FIELDS = ("age", "weight", "height", "goalWeight", "dailyCalorieGoal")


def default_profile() -> Dict[str, Any]:
    return {
        "age": 0,
        "weight": 0,
        "height": 0,
        "goalWeight": 0,
        "dailyCalorieGoal": 2000,
        "activityLevel": "moderate",
    }


def new_user(user_id: int, username: str, hashed_password: str, full_name: str, joined: str) -> Dict[str, Any]:
    return {
        "id": user_id,
        "username": username,
        "password": hashed_password,
        "fullName": full_name,
        "joinedDate": joined,
        "profile": default_profile(),
    }


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of the user without the password hash - the only shape ever returned"""
    return {key: value for key, value in user.items() if key != "password"}
