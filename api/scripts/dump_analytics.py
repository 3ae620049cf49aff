"""
Fetch and aggregate a workspace's analytics, printing the dashboard JSON.

Useful for checking numbers against the partner panel without the UI.

Usage:
    cd api
    python3 -m scripts.dump_analytics --workspace-id 1234
    python3 -m scripts.dump_analytics --workspace-id 1234 --range last_7_days --raw
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import get_args

from flowdash.config import settings
from flowdash.models.partner import DateRange
from flowdash.services.analytics.dashboard import AnalyticsRefresher
from flowdash.services.analytics.loader import load_snapshot, load_team_members
from flowdash.services.partner_api import PartnerApiError, get_partner_client, close_partner_client

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


async def run(workspace_id: str, date_range: DateRange, raw: bool) -> int:
    client = get_partner_client()
    try:
        try:
            bots = await client.list_bots(workspace_id)
        except PartnerApiError as e:
            logger.error("Could not list bots: %s", e)
            return 1

        members = await load_team_members(
            client, workspace_id, page_size=settings.team_members_page_size
        )

        if raw:
            snapshot = await load_snapshot(client, workspace_id, date_range, bots, members)
            print(snapshot.model_dump_json(indent=2))
        else:
            refresher = AnalyticsRefresher(client, workspace_id, bots, members)
            analytics = await refresher.refresh(date_range)
            print(analytics.model_dump_json(indent=2))
        return 0
    finally:
        await close_partner_client()


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump aggregated workspace analytics")
    parser.add_argument("--workspace-id", required=True, help="Partner workspace ID")
    parser.add_argument(
        "--range",
        dest="date_range",
        default=settings.default_range,
        choices=get_args(DateRange),
        help=f"Date range (default: {settings.default_range})",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the raw fetched snapshot instead of the aggregates",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args.workspace_id, args.date_range, args.raw)))


if __name__ == "__main__":
    main()
