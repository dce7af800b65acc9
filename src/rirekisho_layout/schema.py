"""
Centralized data model definitions.

Résumé sections arrive as already-structured data (education, work history,
certifications, free text). The solver reduces them to DataCounts, and its
output is a frozen LayoutPlan consumed read-only by whatever paints the pages.
"""
from __future__ import annotations

import re
import datetime
from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rirekisho_layout.dimensions import PaperProfile

# (year, month, label); synthetic marker rows carry empty year and month
HistoryRow = Tuple[str, str, str]

PRESENT = "present"
_PRESENT_ALIASES = {"present", "current", "now", "現在"}
_YEAR_MONTH_RE = re.compile(r"^\s*(\d{4})\s*[-/.年]\s*(\d{1,2})\s*月?\s*$")


def _parse_year_month(value: Any) -> Any:
    """Accept 'YYYY-MM', 'YYYY/MM' and '2020年4月' in addition to full dates."""
    if isinstance(value, str):
        match = _YEAR_MONTH_RE.match(value)
        if match:
            return datetime.date(int(match.group(1)), int(match.group(2)), 1)
    return value


# ============================================================================
# Résumé Sections
# ============================================================================

class TableRow(BaseModel):
    """Pre-formatted history row supplied verbatim instead of structured entries."""
    model_config = ConfigDict(frozen=True)
    year: str = ""
    month: str = ""
    content: str

    @field_validator("year", "month", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class TableSection(BaseModel):
    """A section given as a raw table."""
    model_config = ConfigDict(frozen=True)
    table: List[TableRow] = Field(default_factory=list)


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    school: str
    degree: Optional[str] = None
    location: Optional[str] = None
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return _parse_year_month(v)


class RoleEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    title: str = ""
    team: Optional[str] = None
    start: Optional[datetime.date] = None
    end: Optional[Union[datetime.date, Literal["present"]]] = None

    @field_validator("start", mode="before")
    @classmethod
    def parse_start(cls, v: Any) -> Any:
        return _parse_year_month(v)

    @field_validator("end", mode="before")
    @classmethod
    def parse_end(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().lower() in _PRESENT_ALIASES:
            return PRESENT
        return _parse_year_month(v)

    @property
    def is_open_ended(self) -> bool:
        """True when the role has no definite end date."""
        return self.end is None or self.end == PRESENT


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    company: str
    location: Optional[str] = None
    roles: List[RoleEntry] = Field(default_factory=list)


class CertificationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    name: str
    issuer: Optional[str] = None
    date: Optional[datetime.date] = None
    url: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _parse_year_month(v)


class ResumeSections(BaseModel):
    """Structured résumé content relevant to the rirekisho form.

    Each history-like section is either a list of structured entries or a raw
    table ({"table": [...]}) whose rows are used verbatim.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")
    education: Optional[Union[List[EducationEntry], TableSection]] = None
    experience: Optional[Union[List[ExperienceEntry], TableSection]] = None
    certifications: Optional[Union[List[CertificationEntry], TableSection]] = None
    motivation: Optional[str] = None
    notes: Optional[str] = None


# ============================================================================
# Solver Input / Output
# ============================================================================

class DataCounts(BaseModel):
    """Total history and license line-items demanded by the résumé."""
    model_config = ConfigDict(frozen=True)
    history_rows: int = Field(default=0, ge=0)
    license_rows: int = Field(default=0, ge=0)


class LayoutRequest(BaseModel):
    """Complete, immutable input to calculate_layout()."""
    model_config = ConfigDict(frozen=True)
    paper: PaperProfile
    hide_motivation: bool = False
    counts: DataCounts = Field(default_factory=DataCounts)


class LayoutPlan(BaseModel):
    """Every measurement the renderer needs, in mm (fonts in pt)."""
    model_config = ConfigDict(frozen=True)

    # Paper & scale
    paper: PaperProfile
    scale: float

    # Page
    margin: float
    margin_bottom: float
    center_gap: float
    page_width: float
    page_height: float

    # Header
    photo_width: float
    contact_width: float
    gender_width: float
    header_height: float
    name_row_height: float
    name_main_height: float
    birth_gender_height: float
    address_row_height: float
    address_furigana_height: float

    # Tables
    table_row_height: float
    table_font_size: float
    table_margin: float
    year_column_width: float
    month_column_width: float

    # Row counts
    left_history_rows: int
    right_history_rows: int
    license_rows: int

    # Section heights
    left_table_height: float
    right_history_table_height: float
    license_table_height: float
    motivation_height: float
    notes_height: float

    footer_height: float
    hide_motivation: bool
    overflows: bool


class HistorySplit(BaseModel):
    """History rows distributed across the left and right pages."""
    model_config = ConfigDict(frozen=True)
    left: List[HistoryRow]
    right: List[HistoryRow]
    section_label_moved: bool = False
