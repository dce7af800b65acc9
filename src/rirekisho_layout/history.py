"""
History and license rows for the rirekisho tables, and their page split.

History rows are ordered (year, month, label) triples. Data rows carry a year
and month; synthetic rows carry only a label: the section openers 学歴 and
職歴, and the closing markers 現在に至る and 以上.
"""

from __future__ import annotations

import datetime
from typing import List, Literal, Sequence, Tuple, Union

from rirekisho_layout.logger import get_logger
from rirekisho_layout.schema import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    HistoryRow,
    HistorySplit,
    ResumeSections,
    TableSection,
)

logger = get_logger("history")

ChronologicalOrder = Literal["asc", "desc"]

EDUCATION_LABEL = "学歴"
EXPERIENCE_LABEL = "職歴"
PRESENT_MARKER = "現在に至る"
END_MARKER = "以上"
SECTION_LABELS = frozenset({EDUCATION_LABEL, EXPERIENCE_LABEL})

GRADUATE_DEGREE_MARKERS = ("修士", "博士")


def _year_month(value: datetime.date) -> Tuple[str, str]:
    return str(value.year), str(value.month)


def _as_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def sort_rows(rows: List[HistoryRow], order: ChronologicalOrder = "asc") -> List[HistoryRow]:
    """Sort rows by (year, month); rows without a date sort as 0. Stable."""
    if order not in ("asc", "desc"):
        raise ValueError(f"Unknown chronological order: {order!r}")
    return sorted(
        rows,
        key=lambda row: _as_int(row[0]) * 100 + _as_int(row[1]),
        reverse=order == "desc",
    )


def is_section_label(row: HistoryRow) -> bool:
    """True for the undated 学歴 / 職歴 rows that open a section."""
    year, month, label = row
    return not year and not month and label in SECTION_LABELS


def education_rows(entries: Sequence[EducationEntry]) -> List[HistoryRow]:
    rows: List[HistoryRow] = []
    for entry in entries:
        name = f"{entry.school} {entry.degree}" if entry.degree else entry.school
        if entry.start:
            rows.append((*_year_month(entry.start), f"{name} 入学"))
        if entry.end:
            degree = entry.degree or ""
            suffix = "修了" if any(m in degree for m in GRADUATE_DEGREE_MARKERS) else "卒業"
            rows.append((*_year_month(entry.end), f"{name} {suffix}"))
    return rows


def experience_rows(entries: Sequence[ExperienceEntry]) -> List[HistoryRow]:
    rows: List[HistoryRow] = []
    for entry in entries:
        for role in entry.roles:
            if role.start:
                rows.append((*_year_month(role.start), f"{entry.company} 入社"))
            if not role.is_open_ended:
                rows.append((*_year_month(role.end), f"{entry.company} 退社"))
    return rows


def certification_rows(entries: Sequence[CertificationEntry]) -> List[HistoryRow]:
    rows: List[HistoryRow] = []
    for entry in entries:
        if entry.date:
            rows.append((*_year_month(entry.date), entry.name))
        else:
            rows.append(("", "", entry.name))
    return rows


def _table_rows(section: TableSection) -> List[HistoryRow]:
    return [(row.year, row.month, row.content) for row in section.table]


def build_history_rows(sections: ResumeSections, order: ChronologicalOrder = "asc") -> List[HistoryRow]:
    """
    Build the combined education/work history table.

    Args:
        sections: Structured résumé sections
        order: "asc" (oldest first, the rirekisho convention) or "desc"

    Returns:
        Rows with section labels, sorted data rows and both closing markers
    """
    rows: List[HistoryRow] = []

    if sections.education is not None:
        rows.append(("", "", EDUCATION_LABEL))
        if isinstance(sections.education, TableSection):
            data = _table_rows(sections.education)
        else:
            data = education_rows(sections.education)
        rows.extend(sort_rows(data, order))

    if sections.experience is not None:
        rows.append(("", "", EXPERIENCE_LABEL))
        if isinstance(sections.experience, TableSection):
            data = _table_rows(sections.experience)
        else:
            data = experience_rows(sections.experience)
        rows.extend(sort_rows(data, order))

    labels = {row[2] for row in rows}
    if PRESENT_MARKER not in labels:
        rows.append(("", "", PRESENT_MARKER))
    if END_MARKER not in labels:
        rows.append(("", "", END_MARKER))
    return rows


def build_license_rows(sections: ResumeSections, order: ChronologicalOrder = "asc") -> List[HistoryRow]:
    """Build the license/certification table rows."""
    section = sections.certifications
    if section is None:
        return []
    if isinstance(section, TableSection):
        data = _table_rows(section)
    else:
        data = certification_rows(section)
    return sort_rows(data, order)


def split_history(rows: Sequence[HistoryRow], left_capacity: int) -> HistorySplit:
    """
    Split history rows between the left and right pages.

    The first `left_capacity` rows go left and the rest go right, except when
    the last left row would be a section label: a heading with nothing under
    it on the same page. The label then moves to the top of the right page and
    its slot on the left page stays empty.

    Args:
        rows: Ordered history rows
        left_capacity: Row capacity of the left page table

    Returns:
        HistorySplit with the two slices and whether a label was moved
    """
    rows = list(rows)
    capacity = max(0, left_capacity)
    left = rows[:capacity]
    if left and is_section_label(left[-1]):
        cut = len(left) - 1
        logger.debug(f"Moving section label {left[-1][2]!r} to the right page")
        return HistorySplit(left=rows[:cut], right=rows[cut:], section_label_moved=True)
    return HistorySplit(left=left, right=rows[capacity:], section_label_moved=False)
