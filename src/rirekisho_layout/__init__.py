"""
Layout solver for the two-page Japanese rirekisho (履歴書) form.

This package contains:
- dimensions: per-paper-size constants
- counter: history/license demand from résumé sections
- allocator: right-page space allocation and row-height fallback
- layout: the assembled LayoutPlan
- validator: overflow verdict
- history: history/license rows and the left/right page split
"""

from .allocator import AllocationResult, AllocationStrategy, allocate, search_row_height
from .counter import count_demand
from .dimensions import PaperProfile, PaperSize, get_dimensions, get_paper_profile
from .errors import ConfigError, LayoutOverflowError, ResumeDataError, RirekishoError
from .history import build_history_rows, build_license_rows, split_history
from .layout import calculate_layout, plan_layout
from .schema import DataCounts, HistorySplit, LayoutPlan, LayoutRequest, ResumeSections
from .validator import OVERFLOW_MESSAGE, ensure_layout_fits, validate_layout

__all__ = [
    'AllocationResult',
    'AllocationStrategy',
    'allocate',
    'search_row_height',
    'count_demand',
    'PaperProfile',
    'PaperSize',
    'get_dimensions',
    'get_paper_profile',
    'ConfigError',
    'LayoutOverflowError',
    'ResumeDataError',
    'RirekishoError',
    'build_history_rows',
    'build_license_rows',
    'split_history',
    'calculate_layout',
    'plan_layout',
    'DataCounts',
    'HistorySplit',
    'LayoutPlan',
    'LayoutRequest',
    'ResumeSections',
    'OVERFLOW_MESSAGE',
    'ensure_layout_fits',
    'validate_layout',
]
