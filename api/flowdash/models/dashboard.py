"""
Dashboard Models — Pydantic response models for the analytics dashboard.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from flowdash.models.partner import (
    AgentDaySummary,
    Bot,
    DateRange,
    FlowDaySummary,
    TeamMember,
    WorkspaceDetails,
)

# =============================================================================
# PER-BOT TABLE
# =============================================================================


class BotAggregate(BaseModel):
    """One row per bot for the selected range."""

    bot_key: str
    name: str
    total_users: int  # max cumulative in range, never summed
    active_users: int
    new_users: int
    total_messages: int
    tickets_resolved: int


# =============================================================================
# SUMMARY (KPI CARDS)
# =============================================================================


class WorkspaceAggregate(BaseModel):
    """Workspace-wide counters for the summary cards."""

    total_users: int = 0
    active_users: int = 0
    new_users: int = 0
    total_messages: int = 0
    in_messages: int = 0
    out_messages: int = 0
    agent_messages: int = 0
    note_messages: int = 0
    assigned: int = 0
    done: int = 0
    email_sent: int = 0
    email_open: int = 0
    # Latest non-zero sample, not a mean
    avg_response_time_seconds: float = 0.0
    avg_resolve_time_seconds: float = 0.0


# =============================================================================
# AGENT LEADERBOARD
# =============================================================================


class AgentAggregate(BaseModel):
    """One ranked row per agent."""

    agent_id: int
    name: str
    email: str = ""
    avatar_url: str = ""
    role: str = "agent"
    is_online: bool = False
    replied_users: int = 0
    agent_messages: int = 0
    note_messages: int = 0
    assigned: int = 0
    done: int = 0
    avg_response_time_seconds: float = 0.0
    avg_resolve_time_seconds: float = 0.0


# =============================================================================
# TIMESERIES (CHARTS)
# =============================================================================


class MessageEvolutionPoint(BaseModel):
    """Single day in the message-type evolution chart."""

    date: str  # YYYY-MM-DD
    received: int
    bot: int
    agents: int


class UserEvolutionPoint(BaseModel):
    """Single day in the new-users chart.

    ``values`` is sparse: it only has a key for bots that reported on that date.
    """

    date: str  # YYYY-MM-DD
    values: dict[str, int] = Field(default_factory=dict)


class UserEvolution(BaseModel):
    """New users per bot per day."""

    points: list[UserEvolutionPoint] = Field(default_factory=list)
    bot_names: list[str] = Field(default_factory=list)


class DashboardAnalytics(BaseModel):
    """Everything the analytics section renders for one date range."""

    date_range: DateRange
    bots: list[BotAggregate] = Field(default_factory=list)
    workspace: WorkspaceAggregate | None = None  # None when nothing was fetched
    agents: list[AgentAggregate] = Field(default_factory=list)
    message_evolution: list[MessageEvolutionPoint] = Field(default_factory=list)
    user_evolution: UserEvolution = Field(default_factory=UserEvolution)


# =============================================================================
# WORKSPACE OVERVIEW
# =============================================================================


class ChannelCounts(BaseModel):
    """Connected channels per kind."""

    omni: int = 0
    facebook: int = 0
    instagram: int = 0
    whatsapp_cloud: int = 0
    telegram: int = 0


class UsageMeter(BaseModel):
    """Plan usage for one resource."""

    used: int
    limit: int
    percent: float  # 0–100, clamped
    level: Literal["ok", "warning", "danger"]


class WorkspaceUsage(BaseModel):
    """Plan usage for bots, members and bot users."""

    bots: UsageMeter
    members: UsageMeter
    bot_users: UsageMeter


class WorkspaceOverview(BaseModel):
    """Static workspace data shown above the analytics section."""

    workspace: WorkspaceDetails
    bots: list[Bot] = Field(default_factory=list)
    team_members: list[TeamMember] = Field(default_factory=list)
    channels: ChannelCounts = Field(default_factory=ChannelCounts)
    usage: WorkspaceUsage


# =============================================================================
# INTERNAL MODELS
# =============================================================================


class AnalyticsSnapshot(BaseModel):
    """Raw data for one date range, after every fetch has settled."""

    date_range: DateRange
    bots: list[Bot] = Field(default_factory=list)
    team_members: list[TeamMember] = Field(default_factory=list)
    flow_summaries: list[FlowDaySummary] = Field(default_factory=list)
    agent_summaries: list[AgentDaySummary] = Field(default_factory=list)
