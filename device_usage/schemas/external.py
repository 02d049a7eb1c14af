from __future__ import annotations

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    id: int
    title: str


class ExternalPostsResponse(BaseModel):
    count: int = Field(ge=0)
    sample: list[PostSummary] = Field(default_factory=list)
