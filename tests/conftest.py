import datetime
import sys
from pathlib import Path
from typing import Callable

import pytest

# Make the src layout importable without an installed package
_SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))

from rirekisho_layout.schema import (  # noqa: E402
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ResumeSections,
    RoleEntry,
)


@pytest.fixture
def sample_sections() -> ResumeSections:
    """Two schools, one finished job, one ongoing job, two certifications."""
    return ResumeSections(
        education=[
            EducationEntry(
                school="東京高等学校",
                start=datetime.date(2010, 4, 1),
                end=datetime.date(2013, 3, 1),
            ),
            EducationEntry(
                school="東京大学",
                degree="工学部",
                start=datetime.date(2013, 4, 1),
                end=datetime.date(2017, 3, 1),
            ),
        ],
        experience=[
            ExperienceEntry(
                company="株式会社A",
                roles=[RoleEntry(title="Engineer", start=datetime.date(2017, 4, 1), end=datetime.date(2020, 3, 1))],
            ),
            ExperienceEntry(
                company="株式会社B",
                roles=[RoleEntry(title="Lead", start=datetime.date(2020, 4, 1), end="present")],
            ),
        ],
        certifications=[
            CertificationEntry(name="基本情報技術者", date=datetime.date(2016, 10, 1)),
            CertificationEntry(name="普通自動車第一種運転免許"),
        ],
        motivation="御社の事業に貢献したいと考えています。",
        notes="貴社規定に従います。",
    )


@pytest.fixture
def write_data_file(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(filename: str, content: str) -> Path:
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write
