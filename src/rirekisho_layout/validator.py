"""Overflow validation for calculated layouts."""

from __future__ import annotations

from typing import Optional

from rirekisho_layout.errors import LayoutOverflowError
from rirekisho_layout.logger import get_logger
from rirekisho_layout.schema import LayoutPlan

logger = get_logger("validator")

OVERFLOW_MESSAGE = (
    "データが多すぎてページに収まりません。"
    "学歴・職歴または免許・資格の数を減らしてください。"
)


def validate_layout(plan: LayoutPlan) -> Optional[str]:
    """Return the overflow message if the plan cannot be rendered, else None."""
    if plan.overflows:
        return OVERFLOW_MESSAGE
    return None


def ensure_layout_fits(plan: LayoutPlan) -> LayoutPlan:
    """
    Raise if the plan overflows; otherwise hand it back unchanged.

    Raises:
        LayoutOverflowError: If the data does not fit the page
    """
    error = validate_layout(plan)
    if error:
        logger.warning(f"Layout overflows on {plan.paper.id.value} paper")
        raise LayoutOverflowError(error, plan)
    return plan
