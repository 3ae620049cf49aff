"""
Dashboard Builder — Raw snapshot in, every derived structure out.

build_dashboard() is pure and recomputes everything from scratch, so the
same snapshot always yields the same result. AnalyticsRefresher wraps
load + build for a long-lived view and makes sure a slow, older refresh
can never overwrite the result of a newer one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from flowdash.models.dashboard import AnalyticsSnapshot, DashboardAnalytics
from flowdash.models.partner import Bot, DateRange, TeamMember
from flowdash.services.analytics.agents import aggregate_agents
from flowdash.services.analytics.bots import aggregate_bots, bot_name_lookup
from flowdash.services.analytics.loader import load_snapshot
from flowdash.services.analytics.timeseries import (
    build_message_evolution,
    build_user_evolution,
)
from flowdash.services.analytics.workspace import reduce_workspace
from flowdash.services.partner_api import PartnerApiClient

logger = logging.getLogger(__name__)


def build_dashboard(snapshot: AnalyticsSnapshot) -> DashboardAnalytics:
    """Run every aggregation over one snapshot."""
    names = bot_name_lookup(snapshot.bots)

    bots = aggregate_bots(snapshot.flow_summaries, names)

    return DashboardAnalytics(
        date_range=snapshot.date_range,
        bots=bots,
        workspace=reduce_workspace(bots, snapshot.flow_summaries),
        agents=aggregate_agents(snapshot.agent_summaries, snapshot.team_members),
        message_evolution=build_message_evolution(snapshot.flow_summaries),
        user_evolution=build_user_evolution(snapshot.flow_summaries, names),
    )


class AnalyticsRefresher:
    """Holds the visible analytics for one workspace.

    Each refresh() takes a generation number when it starts. When it
    finishes, its result is applied only if no refresh was started after
    it; otherwise the stale result is dropped.

    Meant for long-lived consumers that re-query one workspace as the range
    changes. One-shot callers (the HTTP route) call load_snapshot() and
    build_dashboard() directly.
    """

    def __init__(
        self,
        client: PartnerApiClient,
        workspace_id: str,
        bots: Sequence[Bot],
        team_members: Sequence[TeamMember],
    ) -> None:
        self._client = client
        self._workspace_id = workspace_id
        self._bots = list(bots)
        self._team_members = list(team_members)
        self._generation = 0
        self.current: DashboardAnalytics | None = None

    async def refresh(self, date_range: DateRange) -> DashboardAnalytics:
        self._generation += 1
        generation = self._generation

        snapshot = await load_snapshot(
            self._client,
            self._workspace_id,
            date_range,
            self._bots,
            self._team_members,
        )
        result = build_dashboard(snapshot)

        if generation == self._generation:
            self.current = result
        else:
            logger.debug(
                "Discarding stale %s analytics for workspace %s (generation %d < %d)",
                date_range,
                self._workspace_id,
                generation,
                self._generation,
            )
        return result
