"""Exception types raised outside the pure layout solver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rirekisho_layout.schema import LayoutPlan


class RirekishoError(Exception):
    """Base class for all rirekisho layout errors."""


class LayoutOverflowError(RirekishoError):
    """The data cannot be rendered on the selected paper size."""

    def __init__(self, message: str, plan: Optional["LayoutPlan"] = None):
        super().__init__(message)
        self.plan = plan


class ResumeDataError(RirekishoError):
    """A résumé data file is missing, unreadable or malformed."""


class ConfigError(RirekishoError):
    """A configuration file or value is invalid."""
