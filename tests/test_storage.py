import json
from datetime import date, datetime

import pytest
import pytz

from habitcheck.core.exceptions import HabitNotFoundError, PersistenceError
from habitcheck.database.manager import JsonHabitStore
from habitcheck.models.habit import Frequency


@pytest.fixture
def store(tmp_path):
    return JsonHabitStore(tmp_path / "habits")


def test_save_and_load_roundtrip(store, make_habit):
    habit = make_habit(
        frequency=Frequency.custom({1, 3}, time="07:30"),
        history={date(2024, 1, 1): True, date(2024, 1, 3): False},
        description="Ten pages",
        category="learning",
    )
    habit.streak = 1
    habit.goal_completed = True
    habit.goal_completed_at = datetime(2024, 1, 3, 9, 0, tzinfo=pytz.utc)

    store.save_habit(habit)
    loaded = store.load_habit(habit.id)

    assert loaded.id == habit.id
    assert loaded.name == "Read"
    assert loaded.category == "learning"
    assert loaded.description == "Ten pages"
    assert loaded.frequency == habit.frequency
    assert loaded.completion_history == {"2024-01-01": True, "2024-01-03": False}
    assert loaded.streak == 1
    assert loaded.goal_completed
    assert loaded.goal_completed_at == habit.goal_completed_at
    assert loaded.created_at == habit.created_at


def test_missing_habit(store):
    with pytest.raises(HabitNotFoundError) as exc_info:
        store.load_habit("nope")
    assert exc_info.value.habit_id == "nope"
    assert isinstance(exc_info.value, PersistenceError)


def test_corrupt_json_raises_persistence_error(store, make_habit):
    habit = make_habit()
    store.save_habit(habit)
    store._habit_file(habit.id).write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceError):
        store.load_habit(habit.id)


def test_unknown_frequency_type_is_rejected_on_load(store, make_habit):
    habit = make_habit()
    store.save_habit(habit)

    path = store._habit_file(habit.id)
    data = json.loads(path.read_text(encoding="utf-8"))
    data["frequency"]["type"] = "monthly"
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(PersistenceError):
        store.load_habit(habit.id)


def test_naive_created_at_rejected_on_load(store, make_habit):
    habit = make_habit()
    store.save_habit(habit)

    path = store._habit_file(habit.id)
    data = json.loads(path.read_text(encoding="utf-8"))
    data["created_at"] = "2024-01-01T08:00:00"
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(PersistenceError):
        store.load_habit(habit.id)


def test_legacy_empty_time_loads_as_none(store, make_habit):
    habit = make_habit()
    store.save_habit(habit)

    path = store._habit_file(habit.id)
    data = json.loads(path.read_text(encoding="utf-8"))
    data["frequency"]["time"] = ""
    path.write_text(json.dumps(data), encoding="utf-8")

    assert store.load_habit(habit.id).frequency.time is None


def test_list_orders_by_creation(store, make_habit):
    later = make_habit(name="Later", created=date(2024, 1, 5))
    earlier = make_habit(name="Earlier", created=date(2023, 6, 1))
    store.save_habit(later)
    store.save_habit(earlier)

    assert [h.name for h in store.list_habits()] == ["Earlier", "Later"]


def test_list_on_missing_dir(tmp_path):
    assert JsonHabitStore(tmp_path / "absent").list_habits() == []


def test_delete(store, make_habit):
    habit = make_habit()
    store.save_habit(habit)

    assert store.delete_habit(habit.id) is True
    assert store.delete_habit(habit.id) is False
    assert store.list_habits() == []


def test_achievements_storage(store):
    assert store.load_achievements() == {}
    store.save_achievements({"first-habit": {"achievement_id": "first-habit", "unlocked": True}})
    assert store.load_achievements()["first-habit"]["unlocked"] is True


def test_write_failure_raises_persistence_error(tmp_path, make_habit):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    store = JsonHabitStore(blocker / "habits")

    with pytest.raises(PersistenceError):
        store.save_habit(make_habit())


def test_list_skips_corrupt_records(store, make_habit):
    good = make_habit(name="Good")
    bad = make_habit(name="Bad")
    store.save_habit(good)
    store.save_habit(bad)
    store._habit_file(bad.id).write_text("{broken", encoding="utf-8")

    assert [h.id for h in store.list_habits()] == [good.id]
    with pytest.raises(PersistenceError):
        store.load_habit(bad.id)
