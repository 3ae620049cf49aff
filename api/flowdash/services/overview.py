"""
Workspace Overview — Static workspace data shown above the analytics.

Workspace details and the bot list are the primary fetch: if either fails
the view cannot render and PartnerApiError propagates. Channel listings
and the team roster are secondary and degrade to 0 / [].
"""

from __future__ import annotations

import asyncio
import logging

from flowdash.config import settings
from flowdash.models.dashboard import (
    ChannelCounts,
    UsageMeter,
    WorkspaceOverview,
    WorkspaceUsage,
)
from flowdash.models.partner import WorkspaceDetails
from flowdash.services.analytics.loader import load_team_members
from flowdash.services.partner_api import PartnerApiClient

logger = logging.getLogger(__name__)

# Shown when the workspace reports 0 for a limit
_DEFAULT_BOT_LIMIT = 10
_DEFAULT_MEMBER_LIMIT = 5
_DEFAULT_BOT_USER_LIMIT = 1000

_WARNING_PERCENT = 70
_DANGER_PERCENT = 90


def usage_meter(used: int, limit: int) -> UsageMeter:
    """Percent of limit used, clamped to 100; 0 when there is no limit."""
    percent = 0.0 if limit <= 0 else min(used / limit * 100, 100.0)

    if percent >= _DANGER_PERCENT:
        level = "danger"
    elif percent >= _WARNING_PERCENT:
        level = "warning"
    else:
        level = "ok"

    return UsageMeter(used=used, limit=limit, percent=percent, level=level)


def build_usage(
    details: WorkspaceDetails, bots_count: int, members_count: int
) -> WorkspaceUsage:
    return WorkspaceUsage(
        bots=usage_meter(
            details.bot_used or bots_count, details.bot_limit or _DEFAULT_BOT_LIMIT
        ),
        members=usage_meter(
            details.member_used or members_count,
            details.member_limit or _DEFAULT_MEMBER_LIMIT,
        ),
        bot_users=usage_meter(
            details.bot_user_used, details.bot_user_limit or _DEFAULT_BOT_USER_LIMIT
        ),
    )


async def load_channel_counts(client: PartnerApiClient, workspace_id: str) -> ChannelCounts:
    """Count connected channels; a failed listing counts as 0."""
    results = await asyncio.gather(
        client.list_omni_channels(workspace_id),
        client.list_channels(workspace_id, "facebook"),
        client.list_channels(workspace_id, "instagram"),
        client.list_channels(workspace_id, "whatsapp-cloud"),
        client.list_channels(workspace_id, "telegram"),
        return_exceptions=True,
    )

    counts: list[int] = []
    for kind, result in zip(
        ("omni", "facebook", "instagram", "whatsapp_cloud", "telegram"), results
    ):
        if isinstance(result, BaseException):
            logger.warning("Channel listing %s failed for workspace %s: %s", kind, workspace_id, result)
            counts.append(0)
        elif kind == "omni":
            counts.append(sum(1 for channel in result if channel.is_linked))
        else:
            counts.append(len(result))

    omni, facebook, instagram, whatsapp_cloud, telegram = counts
    return ChannelCounts(
        omni=omni,
        facebook=facebook,
        instagram=instagram,
        whatsapp_cloud=whatsapp_cloud,
        telegram=telegram,
    )


async def load_overview(client: PartnerApiClient, workspace_id: str) -> WorkspaceOverview:
    """Fetch workspace, bots and channels in parallel, then the team roster."""
    details, bots, channels = await asyncio.gather(
        client.get_workspace(workspace_id),
        client.list_bots(workspace_id),
        load_channel_counts(client, workspace_id),
    )

    members = await load_team_members(
        client, workspace_id, page_size=settings.team_members_page_size
    )

    return WorkspaceOverview(
        workspace=details,
        bots=bots,
        team_members=members,
        channels=channels,
        usage=build_usage(details, len(bots), len(members)),
    )
