"""Pydantic models for API I/O."""

from .chart import (
    AddPlayerRequest,
    ErrorResponse,
    MessageResponse,
    PlayerPayload,
    PlayerResponse,
    PositionChartResponse,
)
from .reference import PositionResponse, TeamResponse

__all__ = [
    "AddPlayerRequest",
    "ErrorResponse",
    "MessageResponse",
    "PlayerPayload",
    "PlayerResponse",
    "PositionChartResponse",
    "PositionResponse",
    "TeamResponse",
]
