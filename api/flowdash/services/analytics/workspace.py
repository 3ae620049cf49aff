"""
Global Stats Reducer — Workspace-wide counters for the summary cards.

Two passes:
  1. Per-bot aggregates give users, messages and resolved tickets.
  2. The raw day summaries give the fine-grained message/email counters,
     which BotAggregate does not carry, and the average times.

Average times are the latest non-zero sample in input order. A zero means
the day had no samples, so it never overwrites a value already seen.
"""

from __future__ import annotations

from collections.abc import Sequence

from flowdash.models.dashboard import BotAggregate, WorkspaceAggregate
from flowdash.models.partner import FlowDaySummary


def reduce_workspace(
    bots: Sequence[BotAggregate],
    summaries: Sequence[FlowDaySummary],
) -> WorkspaceAggregate | None:
    """Fold bot aggregates and raw summaries into one WorkspaceAggregate.

    Returns None when there are no bot aggregates, so "nothing fetched" is
    distinguishable from "fetched, zero activity".
    """
    if not bots:
        return None

    stats = WorkspaceAggregate()

    for bot in bots:
        stats.total_users += bot.total_users
        stats.active_users += bot.active_users
        stats.new_users += bot.new_users
        stats.total_messages += bot.total_messages
        stats.done += bot.tickets_resolved

    for flow in summaries:
        stats.in_messages += flow.in_messages
        stats.out_messages += flow.out_messages
        stats.agent_messages += flow.agent_messages
        stats.note_messages += flow.note_messages
        stats.assigned += flow.assigned
        stats.email_sent += flow.email_sent
        stats.email_open += flow.email_open
        if flow.avg_response_time_seconds:
            stats.avg_response_time_seconds = flow.avg_response_time_seconds
        if flow.avg_resolve_time_seconds:
            stats.avg_resolve_time_seconds = flow.avg_resolve_time_seconds

    return stats
