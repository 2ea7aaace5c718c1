from concurrent.futures import ThreadPoolExecutor

import pytest

from fittrack.core.errors import InvalidValue, MissingField, NotFound, UserNotFound
from fittrack.services.account_service import account_service
from fittrack.services.workout_service import workout_service


def _log(store, user, **fields):
    fields.setdefault("workout_type", "Run")
    return workout_service.create_workout(store, user["id"], **fields)


def test_create_applies_defaults(store, user):
    workout = _log(store, user, workout_type="  Swim ")

    assert workout["userId"] == user["id"]
    assert workout["type"] == "Swim"
    assert workout["duration"] == 0
    assert workout["calories"] == 0
    assert workout["notes"] == ""
    assert workout["intensity"] == "medium"
    assert workout["date"] == workout["timestamp"]
    assert store.load()["workouts"] == [workout]


def test_create_coerces_amounts(store, user):
    workout = _log(store, user, duration="45", calories="lots", notes=" easy pace ")

    assert workout["duration"] == 45
    assert workout["calories"] == 0
    assert workout["notes"] == "easy pace"


def test_create_accepts_string_user_id(store, user):
    workout = workout_service.create_workout(store, str(user["id"]), "Row")
    assert workout["userId"] == user["id"]


def test_create_requires_user_and_type(store, user):
    with pytest.raises(MissingField):
        workout_service.create_workout(store, None, "Run")
    with pytest.raises(MissingField):
        workout_service.create_workout(store, user["id"], "")


def test_create_unknown_user_leaves_collection_unchanged(store, user):
    _log(store, user)

    with pytest.raises(UserNotFound):
        workout_service.create_workout(store, 999, "Run")
    assert len(store.load()["workouts"]) == 1


@pytest.mark.parametrize("amounts", [{"duration": -1}, {"calories": -50}, {"duration": "-5"}])
def test_create_rejects_negative_amounts(store, user, amounts):
    with pytest.raises(InvalidValue):
        _log(store, user, **amounts)
    assert store.load()["workouts"] == []


def test_create_rejects_bad_date(store, user):
    with pytest.raises(InvalidValue):
        _log(store, user, date="last tuesday")


def test_workout_ids_are_unique(store, user):
    ids = [_log(store, user)["id"] for _ in range(5)]
    assert len(set(ids)) == 5
    assert ids == sorted(ids)


def test_list_orders_by_date_descending(store, user):
    for date in ("2024-01-01", "2024-03-01", "2024-02-01"):
        _log(store, user, date=date)

    listed = workout_service.list_workouts(store, user["id"])

    assert [w["date"] for w in listed] == ["2024-03-01", "2024-02-01", "2024-01-01"]


def test_list_keeps_insertion_order_for_same_date(store, user):
    first = _log(store, user, date="2024-05-05", workout_type="Bike")
    second = _log(store, user, date="2024-05-05", workout_type="Yoga")

    listed = workout_service.list_workouts(store, user["id"])

    assert [w["id"] for w in listed] == [first["id"], second["id"]]


def test_list_only_returns_the_users_workouts(store, user):
    other = account_service.register(store, "other@gmail.com", "password99")
    _log(store, user)
    _log(store, other)

    listed = workout_service.list_workouts(store, str(user["id"]))

    assert [w["userId"] for w in listed] == [user["id"]]


def test_list_requires_user_id(store):
    with pytest.raises(MissingField):
        workout_service.list_workouts(store, None)
    with pytest.raises(InvalidValue):
        workout_service.list_workouts(store, "abc")


def test_update_merges_and_keeps_path_id(store, user):
    workout = _log(store, user, duration=30, notes="first")

    updated = workout_service.update_workout(
        store, workout["id"], {"id": 999, "type": " Trail Run ", "calories": 420}
    )

    assert updated["id"] == workout["id"]
    assert updated["type"] == "Trail Run"
    assert updated["calories"] == 420
    assert updated["duration"] == 30
    assert updated["notes"] == "first"
    assert updated["timestamp"] == workout["timestamp"]
    assert store.load()["workouts"] == [updated]


def test_update_ignores_timestamp(store, user):
    workout = _log(store, user)
    updated = workout_service.update_workout(store, workout["id"], {"timestamp": "2000-01-01"})
    assert updated["timestamp"] == workout["timestamp"]


def test_update_unknown_workout(store, user):
    with pytest.raises(NotFound):
        workout_service.update_workout(store, 42, {"type": "Run"})


def test_update_revalidates_fields(store, user):
    workout = _log(store, user, calories=100)

    with pytest.raises(InvalidValue):
        workout_service.update_workout(store, workout["id"], {"calories": -10})
    with pytest.raises(InvalidValue):
        workout_service.update_workout(store, workout["id"], {"type": "   "})
    with pytest.raises(InvalidValue):
        workout_service.update_workout(store, workout["id"], {"date": "soon"})
    with pytest.raises(UserNotFound):
        workout_service.update_workout(store, workout["id"], {"userId": 999})

    assert store.load()["workouts"] == [workout]


def test_delete(store, user):
    workout = _log(store, user)
    workout_service.delete_workout(store, workout["id"])
    assert store.load()["workouts"] == []


def test_delete_unknown_leaves_collection_unchanged(store, user):
    _log(store, user)

    with pytest.raises(NotFound):
        workout_service.delete_workout(store, 123)
    assert len(store.load()["workouts"]) == 1


def test_create_accepts_huge_amounts(store, user):
    workout = _log(store, user, duration=10 ** 400)
    assert workout["duration"] == 10 ** 400


def test_update_unknown_workout_is_reported_before_bad_fields(store, user):
    with pytest.raises(NotFound):
        workout_service.update_workout(store, 42, {"calories": -1})


def test_non_numeric_ids_are_not_found(store, user):
    _log(store, user)

    with pytest.raises(NotFound):
        workout_service.update_workout(store, "abc", {"type": "Run"})
    with pytest.raises(NotFound):
        workout_service.delete_workout(store, "abc")
    assert len(store.load()["workouts"]) == 1


def test_update_accepts_string_path_id(store, user):
    workout = _log(store, user)
    updated = workout_service.update_workout(store, str(workout["id"]), {"duration": 20})
    assert updated["id"] == workout["id"]
    assert updated["duration"] == 20


def test_concurrent_creates_are_all_persisted(store, user):
    count = 25
    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda n: _log(store, user, duration=n), range(count)))

    stored = store.load()["workouts"]
    assert len(stored) == count
    assert len({w["id"] for w in stored}) == count
    assert sorted(w["duration"] for w in stored) == list(range(count))
    assert {w["id"] for w in created} == {w["id"] for w in stored}
