"""Tests for the dump_analytics CLI script."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from flowdash.models.partner import Bot, FlowDaySummary, TeamMember
from flowdash.services.partner_api import PartnerApiError
from scripts import dump_analytics


def _client() -> MagicMock:
    client = MagicMock()
    client.list_bots = AsyncMock(return_value=[Bot(bot_key="A", name="Support")])
    client.list_team_members = AsyncMock(return_value=[TeamMember(id=1, name="Ana")])
    client.list_flow_summaries = AsyncMock(
        return_value=[FlowDaySummary(bot_key="A", date="2024-01-01", new_users=3)]
    )
    client.list_agent_summaries = AsyncMock(return_value=[])
    return client


@pytest.fixture
def partner(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    client = _client()
    monkeypatch.setattr(dump_analytics, "get_partner_client", lambda: client)
    monkeypatch.setattr(dump_analytics, "close_partner_client", AsyncMock())
    return client


@pytest.mark.unit
class TestRun:
    @pytest.mark.asyncio
    async def test_prints_aggregates(self, partner: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        code = await dump_analytics.run("42", "last_7_days", raw=False)

        body = json.loads(capsys.readouterr().out)
        assert code == 0
        assert body["date_range"] == "last_7_days"
        assert body["bots"][0]["new_users"] == 3
        partner.list_flow_summaries.assert_awaited_once_with("42", "last_7_days", "A")
        dump_analytics.close_partner_client.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_raw_prints_snapshot(self, partner: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        code = await dump_analytics.run("42", "yesterday", raw=True)

        body = json.loads(capsys.readouterr().out)
        assert code == 0
        assert body["flow_summaries"][0]["bot_key"] == "A"

    @pytest.mark.asyncio
    async def test_bot_list_failure_exits_nonzero(self, partner: MagicMock) -> None:
        partner.list_bots = AsyncMock(side_effect=PartnerApiError("/list-flows", "HTTP 500", 500))

        assert await dump_analytics.run("42", "yesterday", raw=False) == 1
        partner.list_flow_summaries.assert_not_awaited()
