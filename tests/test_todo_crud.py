from datetime import timedelta

from conftest import NOW

from taskboard.enums import Priority, StatusFilter
from taskboard.schemas import TodoFilter, TodoUpdate
from taskboard.services.todo_crud import (
    delete_todo,
    get_todo,
    list_categories,
    list_todos,
    update_todo,
)


def names(todos):
    return [todo.name for todo in todos]


def test_create_applies_defaults(make_todo):
    todo = make_todo()

    assert todo.id is not None
    assert todo.is_done is False
    assert todo.priority is Priority.MEDIUM
    assert todo.category == "General"
    assert todo.tags == []
    assert todo.created_at is not None
    assert todo.updated_at is not None


def test_list_orders_by_priority_then_date(session, make_todo):
    make_todo(name="later-medium", date_time=NOW + timedelta(days=3))
    make_todo(name="low", priority=Priority.LOW, date_time=NOW)
    make_todo(name="sooner-medium", date_time=NOW + timedelta(days=2))
    make_todo(name="urgent", priority=Priority.URGENT, date_time=NOW + timedelta(days=9))
    make_todo(name="high", priority=Priority.HIGH, date_time=NOW + timedelta(days=5))

    assert names(list_todos(session)) == [
        "urgent",
        "high",
        "sooner-medium",
        "later-medium",
        "low",
    ]


def test_done_filter(session, make_todo):
    finished = make_todo(name="finished")
    make_todo(name="open")
    update_todo(session, finished.id, TodoUpdate(is_done=True))

    result = list_todos(session, TodoFilter(filter=StatusFilter.DONE))

    assert names(result) == ["finished"]


def test_upcoming_filter_excludes_past_and_done(session, make_todo):
    make_todo(name="future", date_time=NOW + timedelta(hours=1))
    make_todo(name="past", date_time=NOW - timedelta(hours=1))
    done = make_todo(name="future-done", date_time=NOW + timedelta(hours=2))
    update_todo(session, done.id, TodoUpdate(is_done=True))

    result = list_todos(session, TodoFilter(filter=StatusFilter.UPCOMING), now=NOW)

    assert names(result) == ["future"]


def test_search_matches_name_or_description_case_insensitively(session, make_todo):
    make_todo(name="Dentist", short_description="checkup")
    make_todo(name="Groceries", short_description="Eggs and DENTAL floss")
    make_todo(name="Gym", short_description="legs")

    result = list_todos(session, TodoFilter(search="dent"))

    assert sorted(names(result)) == ["Dentist", "Groceries"]


def test_search_treats_wildcards_literally(session, make_todo):
    make_todo(name="100% done")
    make_todo(name="1000 steps")

    assert names(list_todos(session, TodoFilter(search="0%"))) == ["100% done"]


def test_filters_combine(session, make_todo):
    make_todo(name="work-high", category="Work", priority=Priority.HIGH)
    make_todo(name="work-low", category="Work", priority=Priority.LOW)
    make_todo(name="home-high", category="Home", priority=Priority.HIGH)
    done = make_todo(name="work-high-done", category="Work", priority=Priority.HIGH)
    update_todo(session, done.id, TodoUpdate(is_done=True))

    result = list_todos(
        session,
        TodoFilter(filter=StatusFilter.UPCOMING, category="Work", priority=Priority.HIGH),
        now=NOW,
    )

    assert names(result) == ["work-high"]


def test_empty_search_and_category_are_ignored(session, make_todo):
    make_todo(name="a", category="Work")
    make_todo(name="b", category="Home")

    assert len(list_todos(session, TodoFilter(search="", category=""))) == 2


def test_whitespace_search_is_matched_literally(session, make_todo):
    make_todo(name="two words", short_description="x")
    make_todo(name="single", short_description="y")

    assert names(list_todos(session, TodoFilter(search=" "))) == ["two words"]
    assert list_todos(session, TodoFilter(category=" ")) == []


def test_unknown_status_filter_lists_everything(session, make_todo):
    finished = make_todo(name="finished")
    make_todo(name="open")
    update_todo(session, finished.id, TodoUpdate(is_done=True))

    assert TodoFilter(filter="someday").filter is StatusFilter.ALL
    assert TodoFilter(filter=StatusFilter.DONE).filter is StatusFilter.DONE
    assert len(list_todos(session, TodoFilter(filter="someday"))) == 2


def test_list_categories_is_distinct_and_sorted(session, make_todo):
    make_todo(category="Work")
    make_todo(category="Home")
    make_todo(category="Work")
    make_todo()

    assert list_categories(session) == ["General", "Home", "Work"]


def test_update_only_touches_sent_fields(session, make_todo):
    todo = make_todo(name="Original", tags=["a"])

    updated = update_todo(session, todo.id, TodoUpdate(is_done=True, tags=["b", "c"]))

    assert updated.is_done is True
    assert updated.tags == ["b", "c"]
    assert updated.name == "Original"
    assert updated.short_description == "Two litres"


def test_update_missing_returns_none(session):
    assert update_todo(session, 999, TodoUpdate(name="x")) is None


def test_delete(session, make_todo):
    todo = make_todo()

    assert delete_todo(session, todo.id) is True
    assert get_todo(session, todo.id) is None
    assert delete_todo(session, todo.id) is False
