"""Tests for the message and new-user evolution chart builders."""

from __future__ import annotations

import random
from typing import Any

import pytest

from flowdash.models.dashboard import UserEvolution
from flowdash.models.partner import FlowDaySummary
from flowdash.services.analytics.timeseries import (
    build_message_evolution,
    build_user_evolution,
)


def _flow(bot: str, date: str, **kwargs: Any) -> FlowDaySummary:
    return FlowDaySummary(bot_key=bot, date=date, **kwargs)


def _points(result: UserEvolution) -> list[tuple[str, dict[str, int]]]:
    return [(p.date, p.values) for p in result.points]


@pytest.mark.unit
class TestMessageEvolution:
    def test_groups_by_date_across_bots(self) -> None:
        rows = [
            _flow("A", "2024-01-01", in_messages=10, out_messages=8, agent_messages=2),
            _flow("B", "2024-01-01", in_messages=5, out_messages=4, agent_messages=1),
            _flow("A", "2024-01-02", in_messages=3, out_messages=3),
        ]

        points = build_message_evolution(rows)

        assert [p.date for p in points] == ["2024-01-01", "2024-01-02"]
        assert (points[0].received, points[0].bot, points[0].agents) == (15, 12, 3)
        assert (points[1].received, points[1].bot, points[1].agents) == (3, 3, 0)

    def test_sorted_ascending_regardless_of_input_order(self) -> None:
        dates = [f"2024-01-{d:02d}" for d in range(1, 15)] + ["2023-12-31"]
        rows = [_flow("A", d, in_messages=1) for d in dates] * 2
        random.Random(11).shuffle(rows)

        points = build_message_evolution(rows)

        assert [p.date for p in points] == sorted(set(dates))
        assert all(p.received == 2 for p in points)

    def test_empty_input(self) -> None:
        assert build_message_evolution([]) == []


@pytest.mark.unit
class TestUserEvolution:
    _NAMES = {"A": "Support", "B": "Sales"}

    def test_separate_field_per_bot_on_same_date(self) -> None:
        rows = [
            _flow("A", "2024-01-01", new_users=4),
            _flow("B", "2024-01-01", new_users=7),
        ]

        result = build_user_evolution(rows, self._NAMES)

        assert _points(result) == [("2024-01-01", {"Support": 4, "Sales": 7})]
        assert result.bot_names == ["Support", "Sales"]

    def test_repeat_rows_for_same_bot_and_date_add_up(self) -> None:
        rows = [
            _flow("A", "2024-01-01", new_users=4),
            _flow("A", "2024-01-01", new_users=2),
        ]
        assert _points(build_user_evolution(rows, self._NAMES)) == [("2024-01-01", {"Support": 6})]

    def test_points_are_sparse(self) -> None:
        rows = [
            _flow("B", "2024-01-02", new_users=1),
            _flow("A", "2024-01-01", new_users=3),
        ]

        result = build_user_evolution(rows, self._NAMES)

        assert _points(result) == [
            ("2024-01-01", {"Support": 3}),
            ("2024-01-02", {"Sales": 1}),
        ]
        assert result.bot_names == ["Sales", "Support"]

    def test_zero_delta_still_creates_field(self) -> None:
        result = build_user_evolution([_flow("A", "2024-01-01", new_users=0)], self._NAMES)
        assert _points(result) == [("2024-01-01", {"Support": 0})]

    def test_unknown_bot_keyed_by_raw_key(self) -> None:
        result = build_user_evolution([_flow("f-77", "2024-01-01", new_users=2)], self._NAMES)

        assert _points(result) == [("2024-01-01", {"f-77": 2})]
        assert result.bot_names == ["f-77"]

    def test_bot_named_date_does_not_clash_with_the_date(self) -> None:
        rows = [
            _flow("f1", "2024-01-01", new_users=5),
            _flow("f2", "2024-01-01", new_users=2),
        ]

        result = build_user_evolution(rows, {"f1": "date", "f2": "values"})

        assert _points(result) == [("2024-01-01", {"date": 5, "values": 2})]
        assert result.bot_names == ["date", "values"]

    def test_bot_key_named_date_without_display_name(self) -> None:
        result = build_user_evolution([_flow("date", "2024-01-01", new_users=3)], {})

        assert result.points[0].date == "2024-01-01"
        assert result.points[0].values == {"date": 3}

    def test_one_point_per_distinct_date(self) -> None:
        rows = [
            _flow(bot, f"2024-03-{d:02d}", new_users=1)
            for bot in ("A", "B")
            for d in (5, 1, 3)
        ]
        random.Random(5).shuffle(rows)

        result = build_user_evolution(rows, self._NAMES)

        assert [p.date for p in result.points] == ["2024-03-01", "2024-03-03", "2024-03-05"]

    def test_empty_input(self) -> None:
        result = build_user_evolution([], self._NAMES)

        assert result.points == []
        assert result.bot_names == []
