"""API request/response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from tripline.domain.models import ValidationIssue


class HealthResponse(BaseModel):
    status: str = Field(default="ok")


class TimelineResponse(BaseModel):
    status: str = Field(description="done / error")
    timeline: dict[str, Any] | None = Field(default=None, description="Resolved timeline JSON")
    issues: list[ValidationIssue] = Field(default_factory=list)
    unresolved_ids: list[str] = Field(default_factory=list)
    dropped_item_ids: list[str] = Field(default_factory=list)
    trace_id: str = Field(default="")
