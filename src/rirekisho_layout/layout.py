"""
Layout calculation for the two-page rirekisho form.

Combines the paper's dimension profile with the right-page allocation into a
single LayoutPlan, guaranteeing that:
1. Every table shows at least one row
2. The left page capacity matches the final (possibly reduced) row height
3. Font size never varies independently of row height
4. Data that cannot fit is flagged instead of silently clipped
"""

from __future__ import annotations

from rirekisho_layout.allocator import (
    allocate,
    history_overflow,
    left_row_capacity,
    table_height,
)
from rirekisho_layout.dimensions import PaperProfile, PaperSize, get_dimensions, get_paper_profile
from rirekisho_layout.logger import get_logger
from rirekisho_layout.schema import DataCounts, LayoutPlan, LayoutRequest

logger = get_logger("layout")


def calculate_layout(request: LayoutRequest) -> LayoutPlan:
    """
    Calculate complete layout dimensions for the rirekisho document.

    Args:
        request: Paper profile, motivation visibility and data counts

    Returns:
        Frozen LayoutPlan; check `overflows` (or validate_layout) before rendering
    """
    dims = get_dimensions(request.paper)
    counts = request.counts

    # Seed the right page with what overflows at the default row height
    default_capacity = left_row_capacity(dims.left_table_area_height, dims.default_row_height)
    overflow = history_overflow(counts.history_rows, default_capacity)

    allocation = allocate(
        available_height=dims.content_height,
        history_overflow_count=overflow,
        license_demand=counts.license_rows,
        dims=dims,
        hide_motivation=request.hide_motivation,
    )

    # Left capacity must follow the final row height, not the default
    row_height = allocation.row_height
    left_rows = max(1, left_row_capacity(dims.left_table_area_height, row_height))

    logger.debug(
        f"{request.paper.id.value}: left={left_rows} right={allocation.right_history_rows} "
        f"license={allocation.license_rows} row_height={row_height:.3f} overflows={allocation.overflows}"
    )

    return LayoutPlan(
        paper=dims.paper,
        scale=dims.scale,
        margin=dims.margin,
        margin_bottom=dims.margin_bottom,
        center_gap=dims.center_gap,
        page_width=dims.page_width,
        page_height=dims.page_height,
        photo_width=dims.photo_width,
        contact_width=dims.contact_width,
        gender_width=dims.gender_width,
        header_height=dims.header_height,
        name_row_height=dims.name_row_height,
        name_main_height=dims.name_main_height,
        birth_gender_height=dims.birth_gender_height,
        address_row_height=dims.address_row_height,
        address_furigana_height=dims.address_furigana_height,
        table_row_height=row_height,
        table_font_size=allocation.font_size,
        table_margin=dims.table_margin,
        year_column_width=dims.year_column_width,
        month_column_width=dims.month_column_width,
        left_history_rows=left_rows,
        right_history_rows=allocation.right_history_rows,
        license_rows=allocation.license_rows,
        left_table_height=table_height(left_rows, row_height),
        right_history_table_height=table_height(allocation.right_history_rows, row_height),
        license_table_height=table_height(allocation.license_rows, row_height),
        motivation_height=allocation.motivation_height,
        notes_height=allocation.notes_height,
        footer_height=dims.footer_height,
        hide_motivation=request.hide_motivation,
        overflows=allocation.overflows,
    )


def plan_layout(
    paper_size: "str | PaperSize | PaperProfile",
    history_rows: int = 0,
    license_rows: int = 0,
    hide_motivation: bool = False,
) -> LayoutPlan:
    """Convenience wrapper building the LayoutRequest from plain values."""
    paper = paper_size if isinstance(paper_size, PaperProfile) else get_paper_profile(paper_size)
    return calculate_layout(
        LayoutRequest(
            paper=paper,
            hide_motivation=hide_motivation,
            counts=DataCounts(history_rows=history_rows, license_rows=license_rows),
        )
    )
