"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    board_size: int = Field(default=20, ge=4, le=60)
    mode: Literal["human", "ai"] = "human"
    human_tick_ms: int = Field(default=200, ge=20, le=2000)
    agent_delay_ms: int = Field(default=150, ge=10, le=2000)
    fallback: Literal["survival", "greedy"] = "survival"
    seed: int | None = None


class ActionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/actions."""

    action: Literal["toggle_mode", "pause", "restart"]


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: Literal["up", "down", "left", "right"]


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    mode: str
    board_size: int
    score: int
    game_over: bool


class DirectionResponse(BaseModel):
    accepted: bool


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
