"""
Dashboard Router — Workspace overview and analytics for the embedded dashboard.

Endpoints:
  GET /dashboard/{workspace_id}/overview              — Workspace, bots, channels, usage
  GET /dashboard/{workspace_id}/analytics?range=...   — Aggregated analytics for a range

The embedding host verifies the signed URL before requests reach this
service.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from flowdash.config import settings
from flowdash.models.dashboard import DashboardAnalytics, WorkspaceOverview
from flowdash.models.partner import DateRange
from flowdash.services.analytics.dashboard import build_dashboard
from flowdash.services.analytics.loader import load_snapshot, load_team_members
from flowdash.services.overview import load_overview
from flowdash.services.partner_api import (
    PartnerApiClient,
    PartnerApiError,
    get_partner_client,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# OVERVIEW
# =============================================================================


@router.get("/{workspace_id}/overview")
async def get_overview(
    workspace_id: str,
    client: PartnerApiClient = Depends(get_partner_client),
) -> WorkspaceOverview:
    """Workspace details, bots, team, channel counts and plan usage."""
    try:
        return await load_overview(client, workspace_id)
    except PartnerApiError as e:
        logger.error("Dashboard: failed to load workspace %s: %s", workspace_id, e)
        raise HTTPException(
            status_code=502, detail="Failed to load workspace data. Try again."
        )


# =============================================================================
# ANALYTICS
# =============================================================================


@router.get("/{workspace_id}/analytics")
async def get_analytics(
    workspace_id: str,
    date_range: DateRange = Query(default=settings.default_range, alias="range"),
    client: PartnerApiClient = Depends(get_partner_client),
) -> DashboardAnalytics:
    """Per-bot table, summary counters, agent leaderboard and charts."""
    try:
        bots = await client.list_bots(workspace_id)
    except PartnerApiError as e:
        logger.error("Dashboard: failed to list bots for workspace %s: %s", workspace_id, e)
        raise HTTPException(status_code=502, detail="Failed to load bots. Try again.")

    members = await load_team_members(
        client, workspace_id, page_size=settings.team_members_page_size
    )
    snapshot = await load_snapshot(client, workspace_id, date_range, bots, members)

    return build_dashboard(snapshot)
