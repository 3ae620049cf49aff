"""
Agent Performance Aggregator — Ranked leaderboard of human agents.
"""

from __future__ import annotations

from collections.abc import Iterable

from flowdash.models.dashboard import AgentAggregate
from flowdash.models.partner import AgentDaySummary, TeamMember


def _new_agent_row(summary: AgentDaySummary, member: TeamMember | None) -> AgentAggregate:
    """First sighting: identity from the team roster, sums from the record."""
    return AgentAggregate(
        agent_id=summary.agent_id,
        name=(member.name if member and member.name else f"Agent #{summary.agent_id}"),
        email=member.email if member else "",
        avatar_url=member.avatar_url if member else "",
        role=(member.role if member and member.role else "agent"),
        is_online=member.is_online if member else False,
        replied_users=summary.replied_users,
        agent_messages=summary.agent_messages,
        note_messages=summary.note_messages,
        assigned=summary.assigned,
        done=summary.done,
        avg_response_time_seconds=summary.avg_response_time_seconds,
        avg_resolve_time_seconds=summary.avg_resolve_time_seconds,
    )


def aggregate_agents(
    summaries: Iterable[AgentDaySummary],
    members: Iterable[TeamMember],
) -> list[AgentAggregate]:
    """Merge per-agent-per-day summaries into one row per agent.

    Deltas are summed. Each average-time field independently keeps the
    latest non-zero value seen for that agent. Rows are sorted by
    agent_messages descending; ties keep first-seen order.
    """
    roster = {member.id: member for member in members}
    by_agent: dict[int, AgentAggregate] = {}

    for summary in summaries:
        existing = by_agent.get(summary.agent_id)

        if existing is None:
            by_agent[summary.agent_id] = _new_agent_row(
                summary, roster.get(summary.agent_id)
            )
            continue

        existing.replied_users += summary.replied_users
        existing.agent_messages += summary.agent_messages
        existing.note_messages += summary.note_messages
        existing.assigned += summary.assigned
        existing.done += summary.done
        if summary.avg_response_time_seconds > 0:
            existing.avg_response_time_seconds = summary.avg_response_time_seconds
        if summary.avg_resolve_time_seconds > 0:
            existing.avg_resolve_time_seconds = summary.avg_resolve_time_seconds

    # sorted() is stable
    return sorted(by_agent.values(), key=lambda a: a.agent_messages, reverse=True)
