"""Tests for résumé data loading."""
import datetime
import json

import pytest

from rirekisho_layout.errors import ResumeDataError
from rirekisho_layout.loaders import load_resume_sections, parse_resume_sections
from rirekisho_layout.schema import PRESENT, TableSection

SAMPLE_YAML = """
education:
  - school: 東京大学
    degree: 工学部
    start: 2013-04
    end: 2017-03-01
experience:
  - company: 株式会社A
    roles:
      - title: Engineer
        start: 2017/04
        end: present
certifications:
  - name: 基本情報技術者
    date: 2016年10月
motivation: 志望動機です。
"""


class TestLoadResumeSections:
    """Tests for load_resume_sections."""

    def test_load_yaml(self, write_data_file):
        sections = load_resume_sections(write_data_file("resume.yaml", SAMPLE_YAML))
        education = sections.education[0]
        assert education.start == datetime.date(2013, 4, 1)
        assert education.end == datetime.date(2017, 3, 1)
        role = sections.experience[0].roles[0]
        assert role.start == datetime.date(2017, 4, 1)
        assert role.end == PRESENT
        assert role.is_open_ended
        assert sections.certifications[0].date == datetime.date(2016, 10, 1)
        assert sections.motivation == "志望動機です。"

    def test_load_json_with_sections_key(self, write_data_file):
        payload = {
            "name": "山田太郎",
            "sections": {
                "experience": {"table": [{"year": 2020, "month": 4, "content": "株式会社B 入社"}]},
            },
        }
        sections = load_resume_sections(write_data_file("resume.json", json.dumps(payload, ensure_ascii=False)))
        assert isinstance(sections.experience, TableSection)
        assert sections.experience.table[0].year == "2020"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResumeDataError, match="not found"):
            load_resume_sections(tmp_path / "missing.yaml")

    def test_invalid_json(self, write_data_file):
        with pytest.raises(ResumeDataError, match="Invalid JSON"):
            load_resume_sections(write_data_file("resume.json", "{not json"))

    def test_unsupported_suffix(self, write_data_file):
        with pytest.raises(ResumeDataError, match="Unsupported file type"):
            load_resume_sections(write_data_file("resume.txt", "education: []"))

    def test_schema_violation_mentions_path(self, write_data_file):
        path = write_data_file("resume.yaml", "education:\n  - degree: no school\n")
        with pytest.raises(ResumeDataError) as exc_info:
            load_resume_sections(path)
        assert str(path) in str(exc_info.value)

    def test_empty_file(self, write_data_file):
        sections = load_resume_sections(write_data_file("resume.yaml", ""))
        assert sections.education is None


class TestParseResumeSections:
    def test_rejects_non_mapping(self):
        with pytest.raises(ResumeDataError):
            parse_resume_sections(["education"])
