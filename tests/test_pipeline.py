"""Tests for end-to-end layout preparation."""
import datetime

import pytest

from rirekisho_layout.allocator import table_height
from rirekisho_layout.config import LayoutConfig
from rirekisho_layout.errors import LayoutOverflowError
from rirekisho_layout.history import EXPERIENCE_LABEL
from rirekisho_layout.pipeline import prepare_layout
from rirekisho_layout.schema import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ResumeSections,
    RoleEntry,
    TableRow,
    TableSection,
)
from rirekisho_layout.validator import OVERFLOW_MESSAGE


class TestPrepareLayout:
    """Tests for prepare_layout."""

    def test_sample_fits_on_left_page(self, sample_sections):
        prepared = prepare_layout(sample_sections, LayoutConfig(paper_size="a4"))
        assert prepared.counts.history_rows == 7
        assert not prepared.plan.overflows
        assert len(prepared.history.left) == 11
        assert prepared.history.right == []
        assert len(prepared.license) == 2
        assert prepared.motivation.startswith("御社")

    def test_hidden_motivation_drops_text(self, sample_sections):
        prepared = prepare_layout(sample_sections, LayoutConfig(hide_motivation=True))
        assert prepared.motivation == ""
        assert prepared.plan.motivation_height == 0.0
        assert prepared.notes == "貴社規定に従います。"

    def test_long_history_continues_on_right_page(self):
        rows = [TableRow(year=str(2000 + i), month="4", content=f"row {i}") for i in range(30)]
        sections = ResumeSections(experience=TableSection(table=rows))
        prepared = prepare_layout(sections, LayoutConfig(paper_size="a3"))
        left, right = prepared.history.left, prepared.history.right
        assert len(left) == prepared.plan.left_history_rows
        assert len(left) + len(right) == 30 + 3
        assert len(right) <= prepared.plan.right_history_rows

    def test_label_move_reported(self):
        # A3 holds 14 left rows; 12 education rows put 職歴 on row 14
        education = [TableRow(year=str(2000 + i), month="4", content=f"edu {i}") for i in range(12)]
        experience = [TableRow(year="2020", month="4", content="job")]
        sections = ResumeSections(
            education=TableSection(table=education),
            experience=TableSection(table=experience),
        )
        prepared = prepare_layout(sections, LayoutConfig(paper_size="a3"))
        assert prepared.history.section_label_moved
        assert prepared.history.right[0] == ("", "", EXPERIENCE_LABEL)
        assert len(prepared.history.left) == 13

    def test_overflow_raises(self):
        rows = [TableRow(year="2000", month="4", content=f"row {i}") for i in range(100)]
        sections = ResumeSections(
            experience=TableSection(table=rows),
            certifications=[CertificationEntry(name=f"cert {i}") for i in range(50)],
        )
        with pytest.raises(LayoutOverflowError, match=OVERFLOW_MESSAGE):
            prepare_layout(sections, LayoutConfig(paper_size="b5"))


def _long_career(certification_count: int) -> ResumeSections:
    """Six schools and five finished jobs: on A3 職歴 lands on the last left row."""
    return ResumeSections(
        education=[
            EducationEntry(
                school=f"学校{i}",
                start=datetime.date(1990 + 2 * i, 4, 1),
                end=datetime.date(1991 + 2 * i, 3, 1),
            )
            for i in range(6)
        ],
        experience=[
            ExperienceEntry(
                company=f"株式会社{i}",
                roles=[
                    RoleEntry(
                        title="Engineer",
                        start=datetime.date(2005 + 2 * i, 4, 1),
                        end=datetime.date(2006 + 2 * i, 3, 1),
                    )
                ],
            )
            for i in range(5)
        ],
        certifications=[CertificationEntry(name=f"資格{i}") for i in range(certification_count)],
    )


class TestMovedLabelBudget:
    """A label pushed to the right page must be paid for in the plan."""

    @pytest.mark.parametrize("certification_count", range(12))
    def test_right_page_holds_every_row(self, certification_count):
        sections = _long_career(certification_count)
        try:
            prepared = prepare_layout(sections, LayoutConfig(paper_size="a3"))
        except LayoutOverflowError:
            return
        plan = prepared.plan
        assert not plan.overflows
        assert len(prepared.history.left) <= plan.left_history_rows
        assert len(prepared.history.right) <= plan.right_history_rows
        assert plan.right_history_table_height == pytest.approx(
            table_height(plan.right_history_rows, plan.table_row_height)
        )
        # Extra demand used for solving is not reported as data
        assert prepared.counts.history_rows == 22
        assert len(prepared.history.left) + len(prepared.history.right) == 22 + 4
