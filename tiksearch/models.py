from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


PublishTime = Literal["yesterday", "this-week", "this-month", "last-3-months", "last-6-months", "all-time"]


class VideoItem(BaseModel):
    # Only ``id`` and ``create_time`` are interpreted; everything else rides along
    # untouched in the model extras.
    model_config = ConfigDict(extra="allow")

    id: str
    create_time: Any = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None or isinstance(value, (bool, dict, list)):
            raise ValueError("id must be a string or number")
        text = str(value)
        if not text.strip():
            raise ValueError("id must not be blank")
        return text


class SearchRequest(BaseModel):
    query: str
    publish_time: str = "this-week"
    sort_by: str = "most-liked"


class PageResult(BaseModel):
    items: List[VideoItem] = Field(default_factory=list)
    cursor: Optional[Any] = None  # advisory, never used for fan-out
    has_more: bool = False
    credits_remaining: int = 0


class AggregatedResult(BaseModel):
    items: List[VideoItem] = Field(default_factory=list)
    pages_fetched: int = 0
    total_videos_checked: int = 0
    filtered_out: int = 0
    credits_remaining: int = 0


class SearchResponse(BaseModel):
    success: bool = True
    credits_remaining: int = 0
    items: List[VideoItem] = Field(default_factory=list)
    pages_fetched: int = 0
    total_videos_checked: int = 0
    filtered_out: int = 0

    @classmethod
    def from_result(cls, result: AggregatedResult) -> "SearchResponse":
        return cls(
            success=True,
            credits_remaining=result.credits_remaining,
            items=result.items,
            pages_fetched=result.pages_fetched,
            total_videos_checked=result.total_videos_checked,
            filtered_out=result.filtered_out,
        )


class AuthRequest(BaseModel):
    password: str = ""
