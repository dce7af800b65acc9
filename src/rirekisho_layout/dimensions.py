"""
Per-paper-size dimension profiles for the two-page rirekisho form.

All base values are expressed at scale 1.0 (A3). Smaller papers multiply every
linear dimension and every font size by their scale factor, so the form keeps
the same proportions on every supported size.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict


class PaperSize(Enum):
    """Supported paper sizes (landscape, two pages side by side)."""
    A3 = "a3"
    A4 = "a4"
    B4 = "b4"
    B5 = "b5"
    LETTER = "letter"

    @classmethod
    def parse(cls, value: "str | PaperSize") -> "PaperSize":
        """Resolve 'A4', 'a4' or PaperSize.A4 to a PaperSize.

        Raises:
            ValueError: If the value names no supported paper size
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for size in cls:
            if size.value == normalized:
                return size
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown paper size: {value!r} (expected one of: {valid})")


class PaperProfile(BaseModel):
    """Physical paper size and its scale relative to A3."""
    model_config = ConfigDict(frozen=True)

    id: PaperSize
    width_mm: float
    height_mm: float
    scale: float


PAPER_PROFILES: Dict[PaperSize, PaperProfile] = {
    PaperSize.A3: PaperProfile(id=PaperSize.A3, width_mm=420.0, height_mm=297.0, scale=1.0),
    PaperSize.A4: PaperProfile(id=PaperSize.A4, width_mm=297.0, height_mm=210.0, scale=0.71),
    PaperSize.B4: PaperProfile(id=PaperSize.B4, width_mm=364.0, height_mm=257.0, scale=0.86),
    PaperSize.B5: PaperProfile(id=PaperSize.B5, width_mm=257.0, height_mm=182.0, scale=0.61),
    PaperSize.LETTER: PaperProfile(id=PaperSize.LETTER, width_mm=279.4, height_mm=215.9, scale=0.67),
}

# Preferred (history continuation, license) row counts on the right page
PREFERRED_ROW_COUNTS: Dict[PaperSize, Tuple[int, int]] = {
    PaperSize.A3: (9, 7),
    PaperSize.A4: (7, 6),
    PaperSize.B4: (8, 7),
    PaperSize.B5: (6, 5),
    PaperSize.LETTER: (7, 6),
}

# Row height constraints in mm (scale 1.0)
ROW_HEIGHT_DEFAULT = 9.0
ROW_HEIGHT_MIN = 5.0
ROW_HEIGHT_MAX = 11.0

# Font size constraints in pt (scale 1.0)
FONT_SIZE_DEFAULT = 11.0
FONT_SIZE_MIN = 6.0

# Fixed layout dimensions in mm (scale 1.0)
BASE_DIMENSIONS: Dict[str, float] = {
    "margin": 25.0,
    "margin_bottom": 20.0,
    "center_gap": 12.0,
    "photo_width": 62.0,
    "contact_width": 45.0,
    "gender_width": 33.0,
    "header_height": 11.0,  # title row + margin
    "name_row_height": 8.0,
    "name_main_height": 25.0,
    "birth_gender_height": 8.5,
    "address_row_height": 21.0,
    "address_furigana_height": 7.2,
    "footer_height": 4.0,
    "table_margin": 3.0,
    "section_header_height": 8.0,
    "year_column_width": 18.75,
    "month_column_width": 10.5,
    "motivation_min_height": 25.0,
    "notes_min_height": 20.0,
}


class DimensionProfile(BaseModel):
    """Every fixed measurement of the form for one paper size, already scaled."""
    model_config = ConfigDict(frozen=True)

    paper: PaperProfile
    margin: float
    margin_bottom: float
    center_gap: float
    photo_width: float
    contact_width: float
    gender_width: float
    header_height: float
    name_row_height: float
    name_main_height: float
    birth_gender_height: float
    address_row_height: float
    address_furigana_height: float
    footer_height: float
    table_margin: float
    section_header_height: float
    year_column_width: float
    month_column_width: float
    motivation_min_height: float
    notes_min_height: float
    default_row_height: float
    min_row_height: float
    max_row_height: float
    default_font_size: float
    min_font_size: float
    preferred_right_history_rows: int
    preferred_license_rows: int

    @property
    def scale(self) -> float:
        return self.paper.scale

    @property
    def page_width(self) -> float:
        """Width of one page of the spread."""
        return (self.paper.width_mm - self.margin * 2 - self.center_gap) / 2

    @property
    def page_height(self) -> float:
        return self.paper.height_mm - self.margin - self.margin_bottom

    @property
    def content_height(self) -> float:
        """Page height available above the footer."""
        return self.page_height - self.footer_height

    @property
    def left_header_height(self) -> float:
        """Title, name, birth/gender and the two address blocks on the left page."""
        return (
            self.header_height
            + self.name_row_height
            + self.name_main_height
            + self.birth_gender_height
            + self.address_row_height * 2
        )

    @property
    def left_table_area_height(self) -> float:
        return self.content_height - self.left_header_height - self.table_margin


def get_paper_profile(paper_size: "str | PaperSize") -> PaperProfile:
    """Look up the physical profile for a paper size."""
    return PAPER_PROFILES[PaperSize.parse(paper_size)]


def get_dimensions(paper: "PaperProfile | PaperSize | str") -> DimensionProfile:
    """Return the scaled dimension profile for a paper size.

    Args:
        paper: A PaperProfile, a PaperSize or a paper size name such as "a4"

    Returns:
        DimensionProfile with every value multiplied by the paper's scale
    """
    if not isinstance(paper, PaperProfile):
        paper = get_paper_profile(paper)
    scale = paper.scale
    preferred_history, preferred_license = PREFERRED_ROW_COUNTS[paper.id]
    scaled = {key: value * scale for key, value in BASE_DIMENSIONS.items()}
    return DimensionProfile(
        paper=paper,
        default_row_height=ROW_HEIGHT_DEFAULT * scale,
        min_row_height=ROW_HEIGHT_MIN * scale,
        max_row_height=ROW_HEIGHT_MAX * scale,
        default_font_size=FONT_SIZE_DEFAULT * scale,
        min_font_size=FONT_SIZE_MIN * scale,
        preferred_right_history_rows=preferred_history,
        preferred_license_rows=preferred_license,
        **scaled,
    )
