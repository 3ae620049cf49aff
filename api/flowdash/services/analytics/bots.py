"""
Bot Aggregator — One row per bot for the selected range.

total_bot_users from the API is a running total as of each day, so the
per-bot value is the max across the range. Every day_* counter is a
same-day delta and is summed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from flowdash.models.dashboard import BotAggregate
from flowdash.models.partner import Bot, FlowDaySummary


def bot_name_lookup(bots: Iterable[Bot]) -> dict[str, str]:
    """Map bot key -> display name, skipping bots without a key."""
    return {bot.bot_key: bot.name for bot in bots if bot.bot_key}


def fallback_bot_name(bot_key: str) -> str:
    return f"Bot {bot_key}"


def aggregate_bots(
    summaries: Iterable[FlowDaySummary],
    bot_names: Mapping[str, str],
) -> list[BotAggregate]:
    """Merge per-bot-per-day summaries into one BotAggregate per bot.

    Output keeps the order in which each bot was first seen.
    """
    by_bot: dict[str, BotAggregate] = {}

    for flow in summaries:
        existing = by_bot.get(flow.bot_key)

        if existing is None:
            by_bot[flow.bot_key] = BotAggregate(
                bot_key=flow.bot_key,
                name=bot_names.get(flow.bot_key) or fallback_bot_name(flow.bot_key),
                total_users=flow.total_users_cumulative,
                active_users=flow.active_users,
                new_users=flow.new_users,
                total_messages=flow.total_messages,
                tickets_resolved=flow.done,
            )
            continue

        existing.total_users = max(existing.total_users, flow.total_users_cumulative)
        existing.active_users += flow.active_users
        existing.new_users += flow.new_users
        existing.total_messages += flow.total_messages
        existing.tickets_resolved += flow.done

    return list(by_bot.values())
