"""
Partner API Client — Authenticated GETs against the partner and workspace APIs.

Partner endpoints (/partner/workspace/{id}/...) return workspace-level data.
Workspace endpoints (/flow-summary, /flow-agent-summary, /team-members) are
scoped with X-Client-Workspace-Id and, per bot, X-Client-Flow-Ns.

Every response is a {"data": ...} envelope. Any transport failure or non-2xx
status raises PartnerApiError; callers decide whether that is fatal.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from flowdash.config import settings
from flowdash.models.partner import (
    AgentDaySummary,
    Bot,
    ChannelKind,
    DateRange,
    FlowDaySummary,
    OmniChannel,
    TeamMember,
    WorkspaceDetails,
)

logger = logging.getLogger(__name__)


class PartnerApiError(Exception):
    """Request to the partner/workspace API failed."""

    def __init__(self, endpoint: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint
        self.status_code = status_code


class PartnerApiClient:
    """Thin async wrapper over httpx for the partner API."""

    def __init__(
        self,
        token: str,
        partner_base_url: str,
        workspace_base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._partner_base_url = partner_base_url.rstrip("/")
        self._workspace_base_url = workspace_base_url.rstrip("/")
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET url and return the envelope's data field."""
        request_headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        if headers:
            request_headers.update(headers)

        logger.debug("Partner API GET %s %s", url, params or "")

        try:
            resp = await self._http.get(url, params=params, headers=request_headers)
        except httpx.HTTPError as e:
            raise PartnerApiError(url, f"transport error: {e}") from e

        if resp.status_code >= 400:
            logger.error(
                "Partner API error %d on %s: %s", resp.status_code, url, resp.text[:500]
            )
            raise PartnerApiError(
                url, f"HTTP {resp.status_code}", status_code=resp.status_code
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise PartnerApiError(url, "invalid JSON body", resp.status_code) from e

        if not isinstance(body, dict):
            raise PartnerApiError(url, "unexpected response envelope", resp.status_code)
        return body.get("data")

    async def _get_partner(self, path: str) -> Any:
        return await self._get(f"{self._partner_base_url}{path}")

    async def _get_workspace(
        self,
        path: str,
        workspace_id: str,
        params: dict[str, Any] | None = None,
        bot_key: str | None = None,
    ) -> Any:
        headers = {"X-Client-Workspace-Id": workspace_id}
        if bot_key:
            headers["X-Client-Flow-Ns"] = bot_key
        return await self._get(
            f"{self._workspace_base_url}{path}", params=params, headers=headers
        )

    # -------------------------------------------------------------------------
    # Partner endpoints
    # -------------------------------------------------------------------------

    async def get_workspace(self, workspace_id: str) -> WorkspaceDetails:
        data = await self._get_partner(f"/partner/workspace/{workspace_id}")
        return WorkspaceDetails(**(data or {}))

    async def list_bots(self, workspace_id: str) -> list[Bot]:
        data = await self._get_partner(f"/partner/workspace/{workspace_id}/list-flows")
        return [Bot(**row) for row in data or []]

    async def list_omni_channels(self, workspace_id: str) -> list[OmniChannel]:
        data = await self._get_partner(
            f"/partner/workspace/{workspace_id}/get-omni-bot-linked-channels"
        )
        return [OmniChannel(**row) for row in data or []]

    async def list_channels(
        self, workspace_id: str, channel: ChannelKind
    ) -> list[dict[str, Any]]:
        """Raw channel rows; only their count is used."""
        data = await self._get_partner(
            f"/partner/workspace/{workspace_id}/list-channels/{channel}"
        )
        return list(data or [])

    # -------------------------------------------------------------------------
    # Workspace endpoints
    # -------------------------------------------------------------------------

    async def list_flow_summaries(
        self, workspace_id: str, date_range: DateRange, bot_key: str | None = None
    ) -> list[FlowDaySummary]:
        params: dict[str, Any] = {"range": date_range}
        if bot_key:
            params["flow_ns"] = bot_key
        data = await self._get_workspace(
            "/flow-summary", workspace_id, params=params, bot_key=bot_key
        )
        return [FlowDaySummary(**row) for row in data or []]

    async def list_agent_summaries(
        self, workspace_id: str, date_range: DateRange, bot_key: str | None = None
    ) -> list[AgentDaySummary]:
        params: dict[str, Any] = {"range": date_range}
        if bot_key:
            params["flow_ns"] = bot_key
        data = await self._get_workspace(
            "/flow-agent-summary", workspace_id, params=params, bot_key=bot_key
        )
        return [AgentDaySummary(**row) for row in data or []]

    async def list_team_members(
        self, workspace_id: str, limit: int = 100, page: int = 1
    ) -> list[TeamMember]:
        data = await self._get_workspace(
            "/team-members", workspace_id, params={"limit": limit, "page": page}
        )
        return [TeamMember(**row) for row in data or []]


# Singleton
_client: PartnerApiClient | None = None


def get_partner_client() -> PartnerApiClient:
    """Get or create the shared partner API client."""
    global _client
    if _client is None:
        _client = PartnerApiClient(
            token=settings.partner_api_token,
            partner_base_url=settings.partner_api_base_url,
            workspace_base_url=settings.workspace_api_base_url,
            timeout=settings.http_timeout_seconds,
        )
    return _client


async def close_partner_client() -> None:
    """Close the shared client (call on shutdown)."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
