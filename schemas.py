from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models import WEEKDAYS
from time_utils import is_valid_hhmm

# Request-side models. Every recognized option is listed here; an absent value
# means "unconstrained". The search engine trusts objects built from these.

_MODEL_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


def _check_hhmm(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if not is_valid_hhmm(v):
        raise ValueError(f"invalid time {v!r}, expected HHMM")
    return v


def _check_day(v: str) -> str:
    v = (v or "").strip().lower()
    if v not in WEEKDAYS:
        raise ValueError(f"invalid day {v!r}, must be one of: {', '.join(WEEKDAYS)}")
    return v


class DayFilter(BaseModel):
    model_config = _MODEL_CONFIG

    day: str
    max_end_time: Optional[str] = None
    min_start_time: Optional[str] = None

    @field_validator("day")
    @classmethod
    def _day(cls, v: str) -> str:
        return _check_day(v)

    @field_validator("max_end_time", "min_start_time")
    @classmethod
    def _times(cls, v: Optional[str]) -> Optional[str]:
        return _check_hhmm(v)

    @model_validator(mode="after")
    def _ordered(self) -> "DayFilter":
        if self.min_start_time and self.max_end_time and self.min_start_time >= self.max_end_time:
            raise ValueError(f"{self.day}: minStartTime must be less than maxEndTime")
        return self


class BlockedWindow(BaseModel):
    model_config = _MODEL_CONFIG

    day: str
    start_time: str
    end_time: str
    label: Optional[str] = None

    @field_validator("day")
    @classmethod
    def _day(cls, v: str) -> str:
        return _check_day(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def _times(cls, v: str) -> str:
        return _check_hhmm(v)

    @model_validator(mode="after")
    def _ordered(self) -> "BlockedWindow":
        if self.start_time >= self.end_time:
            raise ValueError(f"blocked window on {self.day} must start before it ends")
        return self


class ScheduleFilters(BaseModel):
    model_config = _MODEL_CONFIG

    max_end_time: Optional[str] = None
    min_start_time: Optional[str] = None
    free_days: List[str] = Field(default_factory=list)
    specific_day_filters: List[DayFilter] = Field(default_factory=list)
    blocked_windows: List[BlockedWindow] = Field(default_factory=list)
    required_sections: List[str] = Field(default_factory=list)
    forbidden_sections: List[str] = Field(default_factory=list)
    # Preferred professors: a bonus in scoring, never a hard filter.
    required_professors: List[str] = Field(default_factory=list)
    forbidden_professors: List[str] = Field(default_factory=list)
    only_open_sections: bool = False
    prefer_compact: bool = False
    max_gap_minutes: Optional[int] = None

    @field_validator("max_end_time", "min_start_time")
    @classmethod
    def _times(cls, v: Optional[str]) -> Optional[str]:
        return _check_hhmm(v)

    @field_validator("free_days")
    @classmethod
    def _days(cls, v: List[str]) -> List[str]:
        return [_check_day(d) for d in v]

    @field_validator("required_sections", "forbidden_sections", "required_professors", "forbidden_professors")
    @classmethod
    def _strip_entries(cls, v: List[str]) -> List[str]:
        out = [s.strip() for s in v]
        if any(not s for s in out):
            raise ValueError("entries must be non-empty strings")
        return out

    @field_validator("max_gap_minutes")
    @classmethod
    def _gap_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("maxGapMinutes must be non-negative")
        return v

    @model_validator(mode="after")
    def _consistent(self) -> "ScheduleFilters":
        if self.min_start_time and self.max_end_time and self.min_start_time >= self.max_end_time:
            raise ValueError("minStartTime must be less than maxEndTime")
        both = sorted(set(self.required_sections) & set(self.forbidden_sections))
        if both:
            raise ValueError(f"sections both required and forbidden: {', '.join(both)}")
        return self

    @property
    def has_time_filters(self) -> bool:
        return bool(
            self.free_days
            or self.max_end_time
            or self.min_start_time
            or self.specific_day_filters
            or self.blocked_windows
        )


class ScheduleRequest(BaseModel):
    model_config = _MODEL_CONFIG

    courses: List[str] = Field(min_length=1)
    filters: ScheduleFilters = Field(default_factory=ScheduleFilters)
    max_results: int = Field(default=500, ge=1)

    @field_validator("courses")
    @classmethod
    def _course_codes(cls, v: List[str]) -> List[str]:
        out = [(c or "").strip().upper() for c in v]
        if any(not c for c in out):
            raise ValueError("course codes must be non-empty strings")
        return out
