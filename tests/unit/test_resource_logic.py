from datetime import date, datetime, timezone

import pytest

from app.modules.chores.service import count_chores, filter_chores, status_fields
from app.modules.dashboard.service import completed_on
from app.modules.meals.service import build_week, find_slot
from app.modules.shopping.service import count_items, filter_items


CHORES = [
    {"id": "1", "status": "open"},
    {"id": "2", "status": "in_progress"},
    {"id": "3", "status": "completed"},
    {"id": "4", "status": "completed"},
]


@pytest.mark.unit
class TestChoreFilters:

    def test_partitions_are_exhaustive_and_disjoint(self):
        open_ids = {c["id"] for c in filter_chores(CHORES, "open")}
        completed_ids = {c["id"] for c in filter_chores(CHORES, "completed")}

        assert open_ids.isdisjoint(completed_ids)
        assert open_ids | completed_ids == {c["id"] for c in filter_chores(CHORES, "all")}

    def test_in_progress_counts_as_open(self):
        counts = count_chores(CHORES)

        assert counts.all == 4
        assert counts.open == 2
        assert counts.completed == 2
        assert counts.all == counts.open + counts.completed

    def test_empty_collection(self):
        assert filter_chores([], "open") == []
        assert count_chores([]).all == 0


@pytest.mark.unit
class TestStatusFields:

    def test_completed_stamps_timestamp(self):
        now = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)

        fields = status_fields("completed", now)

        assert fields == {"status": "completed", "completed_at": now.isoformat()}

    @pytest.mark.parametrize("status", ["open", "in_progress"])
    def test_other_statuses_clear_timestamp(self, status):
        assert status_fields(status) == {"status": status, "completed_at": None}


@pytest.mark.unit
class TestShoppingFilters:

    def test_needed_and_purchased(self):
        items = [{"id": "a", "checked": False}, {"id": "b", "checked": True}, {"id": "c", "checked": False}]

        assert [i["id"] for i in filter_items(items, "needed")] == ["a", "c"]
        assert [i["id"] for i in filter_items(items, "purchased")] == ["b"]
        counts = count_items(items)
        assert (counts.all, counts.needed, counts.purchased) == (3, 2, 1)


@pytest.mark.unit
class TestMealGrid:

    def test_find_slot_matches_day_and_type(self):
        slots = [
            {"id": "x", "day_of_week": 1, "meal_type": "dinner"},
            {"id": "y", "day_of_week": 1, "meal_type": "lunch"},
        ]

        assert find_slot(slots, 1, "lunch")["id"] == "y"
        assert find_slot(slots, 2, "lunch") is None

    def test_week_has_seven_days_of_three_meals(self):
        slots = [{
            "id": "x", "family_id": "f", "day_of_week": 0, "meal_type": "breakfast",
            "meal_name": "Pancakes", "recipe_notes": None,
        }]

        week = build_week(slots)

        assert [d.day_name for d in week][0] == "Sunday"
        assert len(week) == 7
        assert all(set(d.meals) == {"breakfast", "lunch", "dinner"} for d in week)
        assert week[0].meals["breakfast"].meal_name == "Pancakes"
        assert week[0].meals["dinner"] is None


@pytest.mark.unit
class TestCompletedToday:

    def test_counts_only_the_given_utc_day(self):
        chores = [
            {"completed_at": "2026-10-19T07:00:00+00:00"},
            {"completed_at": "2026-10-19T23:59:00Z"},
            {"completed_at": "2026-10-18T23:59:00+00:00"},
            {"completed_at": "2026-10-19T01:00:00+02:00"},  # 23:00 UTC on the 18th
            {"completed_at": None},
        ]

        assert completed_on(chores, date(2026, 10, 19)) == 2
