"""
Right-page space allocation for the rirekisho form.

The right page stacks four regions: the history continuation table, the
license table, the motivation box and the notes box. Their combined height is
fixed by the paper, while each demand varies independently. Allocation works
in three stages:

1. Start from preferred row counts and split the leftover height 6:4 between
   the two free-text boxes. Most résumés stop here.
2. If that does not fit, pick a reduction strategy once (license-large,
   history-large, or balanced) and shrink free text and empty rows in the
   order that strategy prescribes.
3. If it still does not fit, shrink the row height (and with it the font size)
   of every table on both pages, using a bounded binary search.

Nothing here raises on overflow. The result carries an `overflows` flag and
the caller decides what to do with it.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from rirekisho_layout.dimensions import DimensionProfile
from rirekisho_layout.logger import get_logger

logger = get_logger("allocator")

# 学歴, 職歴, 現在に至る, 以上
SYNTHETIC_HISTORY_ROWS = 4

# Rows reserved on the left page besides data: table header + one spare row
LEFT_RESERVED_ROWS = 2

MOTIVATION_SHARE = 0.6
NOTES_SHARE = 0.4

FIT_TOLERANCE = 0.1  # mm
SEARCH_MAX_ITERATIONS = 20
SEARCH_TOLERANCE = 0.01  # mm


class AllocationStrategy(Enum):
    """Which reduction order to apply when the preferred allocation overflows."""
    PREFERRED = "preferred"  # preferred allocation already fits
    LICENSE_LARGE = "license_large"
    HISTORY_LARGE = "history_large"
    BALANCED = "balanced"  # both large, or neither large but still over budget


class AllocationResult(BaseModel):
    """Outcome of allocate(). Heights in mm, font size in pt."""
    model_config = ConfigDict(frozen=True)

    right_history_rows: int
    license_rows: int
    motivation_height: float
    notes_height: float
    row_height: float
    font_size: float
    total_height: float
    overflows: bool
    strategy: AllocationStrategy
    row_height_reduced: bool = False


# ============================================================================
# Shared geometry helpers
# ============================================================================

def table_height(row_count: int, row_height: float) -> float:
    """Rendered table height; the extra row is the header."""
    return (row_count + 1) * row_height


def left_row_capacity(left_table_area_height: float, row_height: float) -> int:
    """How many history rows the left page holds at a given row height."""
    return math.floor(left_table_area_height / row_height) - LEFT_RESERVED_ROWS


def history_overflow(history_demand: int, capacity: int) -> int:
    """History rows (data + synthetic markers) that spill onto the right page."""
    return max(0, history_demand + SYNTHETIC_HISTORY_ROWS - capacity)


def font_size_for(row_height: float, dims: DimensionProfile) -> float:
    """Scale the font with the row height, clamped to the paper's font range."""
    ratio = row_height / dims.default_row_height
    return min(dims.default_font_size, max(dims.min_font_size, dims.default_font_size * ratio))


def split_free_text(
    remaining: float,
    motivation_min: float,
    notes_min: float,
    hide_motivation: bool = False,
) -> Tuple[float, float]:
    """
    Split leftover height between the motivation and notes boxes.

    Extra space above both minimums goes 60% to motivation and 40% to notes.
    When even the minimums do not fit, both shrink by the same factor.

    Returns:
        Tuple of (motivation_height, notes_height)
    """
    if hide_motivation:
        return 0.0, max(notes_min, remaining)
    total_min = motivation_min + notes_min
    if remaining >= total_min:
        extra = remaining - total_min
        return motivation_min + extra * MOTIVATION_SHARE, notes_min + extra * NOTES_SHARE
    ratio = max(0.0, remaining / total_min) if total_min > 0 else 0.0
    return motivation_min * ratio, notes_min * ratio


def search_row_height(
    fits: Callable[[float], bool],
    low: float,
    high: float,
    max_iterations: int = SEARCH_MAX_ITERATIONS,
    tolerance: float = SEARCH_TOLERANCE,
) -> Optional[float]:
    """
    Binary search for the largest row height in (low, high) that fits.

    `fits` must be monotone: if a height fits, every smaller height fits too.

    Returns:
        Largest fitting candidate found, or None if no candidate fit
    """
    best: Optional[float] = None
    for _ in range(max_iterations):
        mid = (low + high) / 2
        if fits(mid):
            best = mid
            low = mid
        else:
            high = mid
        if high - low < tolerance:
            break
    return best


def classify(history_overflow_count: int, license_demand: int, dims: DimensionProfile) -> AllocationStrategy:
    """Pick the reduction strategy for an allocation that does not fit as preferred."""
    history_large = history_overflow_count > dims.preferred_right_history_rows
    license_large = license_demand > dims.preferred_license_rows
    if license_large and not history_large:
        return AllocationStrategy.LICENSE_LARGE
    if history_large and not license_large:
        return AllocationStrategy.HISTORY_LARGE
    return AllocationStrategy.BALANCED


# ============================================================================
# Right page working state
# ============================================================================

class _RightPage:
    """Mutable allocation state for one allocate() call."""

    def __init__(self, available_height: float, dims: DimensionProfile, hide_motivation: bool,
                 history_rows: int, license_rows: int, min_history_rows: int, min_license_rows: int):
        self.available_height = available_height
        self.table_margin = dims.table_margin
        self.hide_motivation = hide_motivation
        self.motivation_min = 0.0 if hide_motivation else dims.motivation_min_height
        self.notes_min = dims.notes_min_height
        self.margin_count = 2 if hide_motivation else 3
        self.min_history_rows = min_history_rows
        self.min_license_rows = min_license_rows

        self.history_rows = history_rows
        self.license_rows = license_rows
        self.row_height = dims.default_row_height
        self.motivation_height = 0.0
        self.notes_height = 0.0

    def tables_height(self, history_rows: int, license_rows: int, row_height: float) -> float:
        return (
            table_height(history_rows, row_height)
            + table_height(license_rows, row_height)
            + self.margin_count * self.table_margin
        )

    def redistribute(self) -> None:
        """Give whatever the tables leave over to the free-text boxes."""
        remaining = self.available_height - self.tables_height(
            self.history_rows, self.license_rows, self.row_height
        )
        self.motivation_height, self.notes_height = split_free_text(
            remaining, self.motivation_min, self.notes_min, self.hide_motivation
        )

    def shrink_free_text(self) -> None:
        self.motivation_height = self.motivation_min
        self.notes_height = self.notes_min

    def total_height(self) -> float:
        return (
            self.tables_height(self.history_rows, self.license_rows, self.row_height)
            + self.motivation_height
            + self.notes_height
        )

    def fits(self) -> bool:
        return self.total_height() <= self.available_height + FIT_TOLERANCE


# ============================================================================
# Reduction strategies
# ============================================================================

def _reduce_for_large_license(page: _RightPage) -> None:
    # Free text first, then empty history continuation rows
    page.shrink_free_text()
    while not page.fits() and page.history_rows > page.min_history_rows:
        page.history_rows -= 1


def _reduce_for_large_history(page: _RightPage) -> None:
    # Empty license rows first, then free text
    while page.license_rows > page.min_license_rows:
        page.license_rows -= 1
        page.redistribute()
        if page.fits():
            return
    if not page.fits():
        page.shrink_free_text()


def _reduce_balanced(page: _RightPage) -> None:
    page.shrink_free_text()
    while not page.fits():
        reduced = False
        if page.license_rows > page.min_license_rows:
            page.license_rows -= 1
            reduced = True
        if not page.fits() and page.history_rows > page.min_history_rows:
            page.history_rows -= 1
            reduced = True
        if not reduced:
            break


_STRATEGY_HANDLERS: Dict[AllocationStrategy, Callable[[_RightPage], None]] = {
    AllocationStrategy.LICENSE_LARGE: _reduce_for_large_license,
    AllocationStrategy.HISTORY_LARGE: _reduce_for_large_history,
    AllocationStrategy.BALANCED: _reduce_balanced,
}


# ============================================================================
# Allocation
# ============================================================================

def allocate(
    available_height: float,
    history_overflow_count: int,
    license_demand: int,
    dims: DimensionProfile,
    hide_motivation: bool = False,
) -> AllocationResult:
    """
    Allocate the right page between history, license and free-text regions.

    Args:
        available_height: Right page height above the footer (mm)
        history_overflow_count: History rows that do not fit on the left page
            at the default row height
        license_demand: Number of license/certification rows
        dims: Scaled dimension profile of the paper
        hide_motivation: Whether the motivation box is omitted

    Returns:
        AllocationResult, with overflows=True if nothing made the data fit
    """
    min_history_rows = max(1, history_overflow_count)
    min_license_rows = max(1, license_demand)
    page = _RightPage(
        available_height,
        dims,
        hide_motivation,
        history_rows=max(dims.preferred_right_history_rows, min_history_rows),
        license_rows=max(dims.preferred_license_rows, min_license_rows),
        min_history_rows=min_history_rows,
        min_license_rows=min_license_rows,
    )
    page.redistribute()

    if page.fits():
        return AllocationResult(
            right_history_rows=page.history_rows,
            license_rows=page.license_rows,
            motivation_height=page.motivation_height,
            notes_height=page.notes_height,
            row_height=page.row_height,
            font_size=dims.default_font_size,
            total_height=page.total_height(),
            overflows=False,
            strategy=AllocationStrategy.PREFERRED,
        )

    strategy = classify(history_overflow_count, license_demand, dims)
    logger.debug(f"Preferred allocation does not fit, applying {strategy.value} reduction")
    _STRATEGY_HANDLERS[strategy](page)

    font_size = dims.default_font_size
    row_height_reduced = False
    if not page.fits():
        row_height_reduced = True
        page.row_height = _shrink_row_height(page, history_overflow_count, dims)
        font_size = font_size_for(page.row_height, dims)
        capacity = left_row_capacity(dims.left_table_area_height, page.row_height)
        page.history_rows = max(1, history_overflow(_history_demand(history_overflow_count, dims), capacity))
        logger.debug(f"Row height reduced to {page.row_height:.3f}mm, font size {font_size:.2f}pt")

    page.redistribute()
    overflows = not page.fits()
    if overflows:
        logger.debug("Allocation overflows even at the minimum row height")

    return AllocationResult(
        right_history_rows=page.history_rows,
        license_rows=page.license_rows,
        motivation_height=page.motivation_height,
        notes_height=page.notes_height,
        row_height=page.row_height,
        font_size=font_size,
        total_height=page.total_height(),
        overflows=overflows,
        strategy=strategy,
        row_height_reduced=row_height_reduced,
    )


def _history_demand(history_overflow_count: int, dims: DimensionProfile) -> int:
    """Data rows implied by the overflow at the default row height.

    Exact whenever history overflows; when it does not, any value that fits
    the default capacity behaves the same, since capacity only grows as rows
    get shorter.
    """
    capacity = left_row_capacity(dims.left_table_area_height, dims.default_row_height)
    return history_overflow_count + capacity - SYNTHETIC_HISTORY_ROWS


def _shrink_row_height(page: _RightPage, history_overflow_count: int, dims: DimensionProfile) -> float:
    """Largest row height at which every table on both pages fits."""
    demand = _history_demand(history_overflow_count, dims)
    free_text_min = page.motivation_min + page.notes_min

    def fits(row_height: float) -> bool:
        capacity = left_row_capacity(dims.left_table_area_height, row_height)
        history_rows = max(1, history_overflow(demand, capacity))
        total = page.tables_height(history_rows, page.license_rows, row_height) + free_text_min
        return total <= page.available_height + FIT_TOLERANCE

    best = search_row_height(fits, dims.min_row_height, dims.default_row_height)
    if best is None:
        return dims.min_row_height
    return best
