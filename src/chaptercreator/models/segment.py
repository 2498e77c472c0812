"""Segment and chapter data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SegmentType(str, Enum):
    """Classification of a media segment."""

    INTRO = "Intro"
    OUTRO = "Outro"
    RECAP = "Recap"
    PREVIEW = "Preview"
    COMMERCIAL = "Commercial"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> SegmentType:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return cls.UNKNOWN


class Segment(BaseModel):
    """A classified time range within one media item (times in ticks)."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    start_ticks: int = Field(ge=0)
    end_ticks: int
    type: SegmentType = SegmentType.UNKNOWN

    @field_validator("item_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        # Catalog ids may arrive as UUIDs or ints
        return value if isinstance(value, str) else str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> SegmentType:
        return value if isinstance(value, SegmentType) else SegmentType(value)

    @model_validator(mode="after")
    def _check_range(self) -> Segment:
        if self.end_ticks <= self.start_ticks:
            raise ValueError(
                f"Segment end ({self.end_ticks}) must be after start ({self.start_ticks})"
            )
        return self

    @property
    def duration_ticks(self) -> int:
        return self.end_ticks - self.start_ticks


class Chapter(BaseModel):
    """A named navigation unit with formatted start and end times."""

    model_config = ConfigDict(frozen=True)

    start_time: str
    end_time: str
    title: str
