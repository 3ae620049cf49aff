"""
Analytics Loader — Concurrent per-bot fetch of flow and agent summaries.

For every bot with a key, two requests run at once via asyncio.gather:
  - flow summary (per-day bot metrics)
  - agent summary (per-day agent metrics)

A failing request degrades to an empty list for that bot; partial
analytics beat none. Results are flattened only after every request
has settled, in bot order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from flowdash.models.dashboard import AnalyticsSnapshot
from flowdash.models.partner import (
    AgentDaySummary,
    Bot,
    DateRange,
    FlowDaySummary,
    TeamMember,
)
from flowdash.services.partner_api import PartnerApiClient

logger = logging.getLogger(__name__)


async def _flow_summaries_or_empty(
    client: PartnerApiClient,
    workspace_id: str,
    date_range: DateRange,
    bot: Bot,
) -> list[FlowDaySummary]:
    try:
        return await client.list_flow_summaries(workspace_id, date_range, bot.bot_key)
    except Exception as e:
        logger.warning("Flow summary unavailable for bot %s (%s): %s", bot.name, bot.bot_key, e)
        return []


async def _agent_summaries_or_empty(
    client: PartnerApiClient,
    workspace_id: str,
    date_range: DateRange,
    bot: Bot,
) -> list[AgentDaySummary]:
    try:
        return await client.list_agent_summaries(workspace_id, date_range, bot.bot_key)
    except Exception as e:
        logger.warning("Agent summary unavailable for bot %s (%s): %s", bot.name, bot.bot_key, e)
        return []


async def load_team_members(
    client: PartnerApiClient,
    workspace_id: str,
    page_size: int = 100,
) -> list[TeamMember]:
    """Team roster, or [] when the endpoint is unavailable."""
    try:
        return await client.list_team_members(workspace_id, limit=page_size)
    except Exception as e:
        logger.warning("Team members unavailable for workspace %s: %s", workspace_id, e)
        return []


async def load_snapshot(
    client: PartnerApiClient,
    workspace_id: str,
    date_range: DateRange,
    bots: Sequence[Bot],
    team_members: Sequence[TeamMember],
) -> AnalyticsSnapshot:
    """Fan out summary requests for every bot and flatten the results."""
    keyed = [bot for bot in bots if bot.bot_key]

    if not keyed:
        return AnalyticsSnapshot(
            date_range=date_range, bots=list(bots), team_members=list(team_members)
        )

    flow_results, agent_results = await asyncio.gather(
        asyncio.gather(
            *(_flow_summaries_or_empty(client, workspace_id, date_range, b) for b in keyed)
        ),
        asyncio.gather(
            *(_agent_summaries_or_empty(client, workspace_id, date_range, b) for b in keyed)
        ),
    )

    flow_summaries = [row for rows in flow_results for row in rows]
    agent_summaries = [row for rows in agent_results for row in rows]

    logger.info(
        "Loaded %s analytics for workspace %s: %d bots, %d flow rows, %d agent rows",
        date_range,
        workspace_id,
        len(keyed),
        len(flow_summaries),
        len(agent_summaries),
    )

    return AnalyticsSnapshot(
        date_range=date_range,
        bots=list(bots),
        team_members=list(team_members),
        flow_summaries=flow_summaries,
        agent_summaries=agent_summaries,
    )
