"""
Time-Series Builder — Chart points grouped by calendar date.

Dates are ISO strings (YYYY-MM-DD), so plain string ordering is
chronological. Points come out ascending regardless of input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from flowdash.models.dashboard import (
    MessageEvolutionPoint,
    UserEvolution,
    UserEvolutionPoint,
)
from flowdash.models.partner import FlowDaySummary


def build_message_evolution(
    summaries: Iterable[FlowDaySummary],
) -> list[MessageEvolutionPoint]:
    """Received / bot / agent messages per day, summed across bots."""
    by_date: dict[str, MessageEvolutionPoint] = {}

    for flow in summaries:
        point = by_date.get(flow.date)
        if point is None:
            by_date[flow.date] = MessageEvolutionPoint(
                date=flow.date,
                received=flow.in_messages,
                bot=flow.out_messages,
                agents=flow.agent_messages,
            )
        else:
            point.received += flow.in_messages
            point.bot += flow.out_messages
            point.agents += flow.agent_messages

    return [by_date[d] for d in sorted(by_date)]


def build_user_evolution(
    summaries: Iterable[FlowDaySummary],
    bot_names: Mapping[str, str],
) -> UserEvolution:
    """New users per day with one series per bot.

    Bots without a display name are keyed by their raw bot key. Each point
    only has fields for bots that reported on that date.
    """
    by_date: dict[str, dict[str, int]] = {}
    series: dict[str, None] = {}  # ordered set

    for flow in summaries:
        name = bot_names.get(flow.bot_key) or flow.bot_key
        series[name] = None

        counts = by_date.setdefault(flow.date, {})
        counts[name] = counts.get(name, 0) + flow.new_users

    return UserEvolution(
        points=[UserEvolutionPoint(date=d, values=by_date[d]) for d in sorted(by_date)],
        bot_names=list(series),
    )
