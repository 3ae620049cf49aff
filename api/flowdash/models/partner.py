"""
Partner Models — Pydantic models for payloads returned by the partner API.

Field aliases match the wire names (flow_ns, summary_date, day_*); the
Python attribute names are what the aggregation code works with.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DateRange = Literal[
    "yesterday",
    "last_7_days",
    "last_week",
    "last_30_days",
    "last_month",
    "last_3_months",
]

ChannelKind = Literal["facebook", "instagram", "whatsapp-cloud", "telegram"]


def _zero_if_null(value: Any) -> Any:
    """The API sends null for counters on days without activity."""
    return 0 if value is None else value


# =============================================================================
# WORKSPACE
# =============================================================================


class WorkspaceDetails(BaseModel):
    """Workspace plan, limits and owner, from /partner/workspace/{id}."""

    id: int
    name: str
    plan: str = ""
    bot_user_used: int = 0
    bot_user_limit: int = 0
    bot_used: int = 0
    bot_limit: int = 0
    member_used: int = 0
    member_limit: int = 0
    is_paused: int = 0
    auto_renew: int = 0
    billing_start_at: str | None = None
    billing_end_at: str | None = None
    owner_id: int | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    points: int = 0

    @field_validator(
        "bot_user_used",
        "bot_user_limit",
        "bot_used",
        "bot_limit",
        "member_used",
        "member_limit",
        "is_paused",
        "auto_renew",
        "points",
        mode="before",
    )
    @classmethod
    def coerce_null_counters(cls, value: Any) -> Any:
        return _zero_if_null(value)


class Bot(BaseModel):
    """A flow (bot) configured in the workspace."""

    bot_key: str = Field("", alias="flow_ns")
    name: str = ""
    type: str | None = None

    # Draft bots come back with a null flow_ns; they are skipped downstream.
    @field_validator("bot_key", "name", mode="before")
    @classmethod
    def coerce_null_strings(cls, value: Any) -> Any:
        return "" if value is None else value

    class Config:
        populate_by_name = True


class TeamMember(BaseModel):
    """Team member identity record."""

    id: int
    name: str = ""
    email: str = ""
    avatar_url: str = Field("", alias="image")
    role: str = "agent"  # owner | admin | member | agent
    is_online: bool = False

    @field_validator("name", "email", "avatar_url", mode="before")
    @classmethod
    def coerce_null_strings(cls, value: Any) -> Any:
        return "" if value is None else value

    class Config:
        populate_by_name = True


class OmniChannel(BaseModel):
    """Omni-bot channel link status."""

    channel: str
    is_linked: bool = False
    linked_name: str | None = None


# =============================================================================
# ANALYTICS SUMMARIES
# =============================================================================


class FlowDaySummary(BaseModel):
    """One bot's metrics for one calendar day."""

    bot_key: str = Field(..., alias="flow_ns")
    date: str = Field(..., alias="summary_date")  # YYYY-MM-DD
    total_users_cumulative: int = Field(0, alias="total_bot_users")
    active_users: int = Field(0, alias="day_active_bot_users")
    new_users: int = Field(0, alias="day_new_bot_users")
    total_messages: int = Field(0, alias="day_total_messages")
    in_messages: int = Field(0, alias="day_in_messages")
    out_messages: int = Field(0, alias="day_out_messages")
    agent_messages: int = Field(0, alias="day_agent_messages")
    note_messages: int = Field(0, alias="day_note_messages")
    assigned: int = Field(0, alias="day_assigned")
    done: int = Field(0, alias="day_done")
    email_sent: int = Field(0, alias="day_email_sent")
    email_open: int = Field(0, alias="day_email_open")
    avg_response_time_seconds: float = Field(0.0, alias="avg_agent_response_time")
    avg_resolve_time_seconds: float = Field(0.0, alias="avg_resolve_time")

    @field_validator(
        "total_users_cumulative",
        "active_users",
        "new_users",
        "total_messages",
        "in_messages",
        "out_messages",
        "agent_messages",
        "note_messages",
        "assigned",
        "done",
        "email_sent",
        "email_open",
        "avg_response_time_seconds",
        "avg_resolve_time_seconds",
        mode="before",
    )
    @classmethod
    def coerce_null_counters(cls, value: Any) -> Any:
        return _zero_if_null(value)

    class Config:
        populate_by_name = True


class AgentDaySummary(BaseModel):
    """One agent's metrics for one bot on one day."""

    bot_key: str = Field("", alias="flow_ns")
    date: str = Field(..., alias="summary_date")
    agent_id: int
    replied_users: int = Field(0, alias="day_reply_bot_users")
    agent_messages: int = Field(0, alias="day_agent_messages")
    note_messages: int = Field(0, alias="day_note_messages")
    assigned: int = Field(0, alias="day_assigned")
    done: int = Field(0, alias="day_done")
    avg_response_time_seconds: float = Field(0.0, alias="avg_agent_response_time")
    avg_resolve_time_seconds: float = Field(0.0, alias="avg_resolve_time")

    @field_validator(
        "replied_users",
        "agent_messages",
        "note_messages",
        "assigned",
        "done",
        "avg_response_time_seconds",
        "avg_resolve_time_seconds",
        mode="before",
    )
    @classmethod
    def coerce_null_counters(cls, value: Any) -> Any:
        return _zero_if_null(value)

    class Config:
        populate_by_name = True
