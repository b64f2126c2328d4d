# models.py
# -*- coding: utf-8 -*-
"""
Report, filter and statistics models.

Reports keep the backend's wire field names as aliases, including the
capitalised ``Description`` column.
"""

from datetime import date, datetime
from typing import Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# -------------------------
# Constants
# -------------------------

CRITICAL = "Critical"
MODERATE = "Moderate"
MINOR = "Minor"
SEVERITY_LEVELS = (CRITICAL, MODERATE, MINOR)

STATUS_ALL = "All"
STATUS_ACTIVE = "Active"
STATUS_RESOLVED = "Resolved"
STATUS_OPTIONS = (STATUS_ALL, STATUS_ACTIVE, STATUS_RESOLVED)

DISTRICT_ALL = "All"


class Report(BaseModel):
    """One leak incident record as stored by the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Union[int, str]
    address: str = ""
    leak_type: str = ""
    created_at: str = ""
    resolved: bool = False
    district: str = ""
    description: Optional[str] = Field(default=None, alias="Description")

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, value):
        if value is None:
            return ""
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return str(value)

    @field_validator("address", "leak_type", "district", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return "" if value is None else str(value)

    def to_record(self) -> dict:
        """Serialise back to the backend's field names."""
        return self.model_dump(by_alias=True)


class FilterState(BaseModel):
    """Active table filters. Date bounds are inclusive ``YYYY-MM-DD`` strings."""

    status: str = STATUS_ALL
    severities: Set[str] = Field(default_factory=lambda: set(SEVERITY_LEVELS))
    district: str = DISTRICT_ALL
    date_start: Optional[str] = None
    date_end: Optional[str] = None

    @field_validator("status")
    @classmethod
    def _check_status(cls, value):
        if value not in STATUS_OPTIONS:
            raise ValueError(f"status must be one of {STATUS_OPTIONS}, got {value!r}")
        return value

    @field_validator("severities", mode="before")
    @classmethod
    def _coerce_severities(cls, value):
        if value is None:
            return set()
        unknown = set(value) - set(SEVERITY_LEVELS)
        if unknown:
            raise ValueError(f"unknown severities: {sorted(unknown)}")
        return set(value)

    @field_validator("district", mode="before")
    @classmethod
    def _default_district(cls, value):
        return value or DISTRICT_ALL

    @field_validator("date_start", "date_end", mode="before")
    @classmethod
    def _truncate_date(cls, value):
        # date pickers may hand back "YYYY-MM-DDTHH:MM:SS"
        if value is None or value == "":
            return None
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        return str(value)[:10]


class Statistics(BaseModel):
    """Derived counters shown on the stat cards."""

    total_active: int = 0
    resolved_today: int = 0
    critical_active: int = 0
    avg_response_time: str = ""
