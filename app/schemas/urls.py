"""
app/schemas/urls.py

Request/response schemas for url and check endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class UrlCreateRequest(BaseModel):
    url: str | None = Field(default=None, description="Raw url as typed by the user")


class FlashMessageResponse(BaseModel):
    severity: str
    message: str


class UrlRegisteredResponse(BaseModel):
    id: int
    created: bool
    flash: FlashMessageResponse


class UrlResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UrlCheckResponse(BaseModel):
    id: int
    url_id: int
    status_code: int
    h1: str | None = None
    title: str | None = None
    description: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UrlListItemResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    last_check_status_code: int | None = None
    last_check_at: datetime | None = None

    model_config = {"from_attributes": True}


class UrlDetailResponse(BaseModel):
    url: UrlResponse
    checks: list[UrlCheckResponse] = Field(default_factory=list)


class CheckRunResponse(BaseModel):
    flash: FlashMessageResponse
    redirect_target_id: int
    outcome: str
    check: UrlCheckResponse | None = None
