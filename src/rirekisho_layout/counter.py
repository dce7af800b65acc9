"""
Data counting for the layout solver.

Reduces structured résumé sections to the two integers the solver treats as
demand. Nothing here looks at date values beyond whether they are present.
"""

from __future__ import annotations

from typing import List, Union

from rirekisho_layout.logger import get_logger
from rirekisho_layout.schema import (
    CertificationEntry,
    DataCounts,
    EducationEntry,
    ExperienceEntry,
    ResumeSections,
    TableSection,
)

logger = get_logger("counter")


def count_education_rows(section: Union[List[EducationEntry], TableSection, None]) -> int:
    """Each entry yields up to two rows: one for entry and one for completion."""
    if section is None:
        return 0
    if isinstance(section, TableSection):
        return len(section.table)
    return sum(int(entry.start is not None) + int(entry.end is not None) for entry in section)


def count_experience_rows(section: Union[List[ExperienceEntry], TableSection, None]) -> int:
    """Each role yields one start row, plus one more when it has a definite end."""
    if section is None:
        return 0
    if isinstance(section, TableSection):
        return len(section.table)
    rows = 0
    for entry in section:
        for role in entry.roles:
            rows += 1
            if not role.is_open_ended:
                rows += 1
    return rows


def count_certification_rows(section: Union[List[CertificationEntry], TableSection, None]) -> int:
    if section is None:
        return 0
    if isinstance(section, TableSection):
        return len(section.table)
    return len(section)


def count_demand(sections: ResumeSections) -> DataCounts:
    """
    Count history and license line-items.

    Args:
        sections: Structured résumé sections

    Returns:
        DataCounts with total history rows (education + experience) and license rows
    """
    history_rows = count_education_rows(sections.education) + count_experience_rows(sections.experience)
    license_rows = count_certification_rows(sections.certifications)
    logger.debug(f"Counted {history_rows} history rows and {license_rows} license rows")
    return DataCounts(history_rows=history_rows, license_rows=license_rows)
