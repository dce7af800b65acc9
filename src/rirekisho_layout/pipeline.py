"""
End-to-end layout preparation: count, solve, validate, build rows, split.

This is the sequence a renderer runs before painting the two pages. It stops
at the first overflow and never returns a partial result.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from rirekisho_layout.config import LayoutConfig
from rirekisho_layout.counter import count_demand
from rirekisho_layout.dimensions import get_paper_profile
from rirekisho_layout.history import build_history_rows, build_license_rows, split_history
from rirekisho_layout.layout import calculate_layout
from rirekisho_layout.logger import get_logger
from rirekisho_layout.schema import (
    DataCounts,
    HistoryRow,
    HistorySplit,
    LayoutPlan,
    LayoutRequest,
    ResumeSections,
)
from rirekisho_layout.validator import ensure_layout_fits

logger = get_logger("pipeline")


class PreparedLayout(BaseModel):
    """Everything the page renderer consumes."""
    model_config = ConfigDict(frozen=True)

    counts: DataCounts
    plan: LayoutPlan
    history: HistorySplit
    license: List[HistoryRow]
    motivation: str = ""
    notes: str = ""


def _solve(counts: DataCounts, config: LayoutConfig) -> LayoutPlan:
    request = LayoutRequest(
        paper=get_paper_profile(config.paper_size),
        hide_motivation=config.hide_motivation,
        counts=counts,
    )
    return ensure_layout_fits(calculate_layout(request))


def prepare_layout(sections: ResumeSections, config: LayoutConfig) -> PreparedLayout:
    """
    Solve the layout for a résumé and distribute its rows over the pages.

    A section label moved off the left page needs a right-page row the
    allocator did not budget for. The layout is then re-solved with that much
    extra history demand until the right page holds every row it is given.

    Raises:
        LayoutOverflowError: If the data cannot fit the selected paper size
    """
    counts = count_demand(sections)
    history = build_history_rows(sections, config.chronological_order)
    license_rows = build_license_rows(sections, config.chronological_order)

    padding = 0
    while True:
        solved_counts = counts.model_copy(update={"history_rows": counts.history_rows + padding})
        plan = _solve(solved_counts, config)
        split = split_history(history, plan.left_history_rows)
        shortfall = len(split.right) - plan.right_history_rows
        if shortfall <= 0:
            break
        padding += shortfall
        logger.info(
            f"Right page needs {len(split.right)} history rows but only "
            f"{plan.right_history_rows} were allocated; re-solving with {padding} extra"
        )

    logger.info(
        f"Layout ready: {len(split.left)} left rows, {len(split.right)} right rows, "
        f"{len(license_rows)} license rows on {config.paper_size.value}"
    )
    return PreparedLayout(
        counts=counts,
        plan=plan,
        history=split,
        license=license_rows,
        motivation="" if config.hide_motivation else (sections.motivation or ""),
        notes=sections.notes or "",
    )
