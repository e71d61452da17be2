"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str
    upstream_url: str
    protocol: str


class ToolDTO(BaseModel):
    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=dict)


class ToolListResponseDTO(BaseModel):
    tools: list[ToolDTO]


class ToolResultDTO(BaseModel):
    text: str
    is_error: bool = False

    @classmethod
    def from_tool_result(cls, result):
        """Convert ToolResult to DTO."""
        return cls(text=result.text, is_error=result.is_error)


class ErrorDTO(BaseModel):
    kind: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
