"""
Résumé data file loading.

Reads YAML or JSON documents into ResumeSections. Unlike the solver, loading
talks to the filesystem, so every failure is reported as ResumeDataError with
the offending path in the message.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from rirekisho_layout.errors import ResumeDataError
from rirekisho_layout.logger import get_logger
from rirekisho_layout.schema import ResumeSections

logger = get_logger("loaders")

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def _parse_document(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ResumeDataError(f"{path}: Invalid JSON - {e}") from e
    if suffix in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ResumeDataError(f"{path}: Invalid YAML - {e}") from e
    raise ResumeDataError(f"{path}: Unsupported file type {suffix!r} (use .yaml, .yml or .json)")


def parse_resume_sections(data: Dict[str, Any]) -> ResumeSections:
    """Validate an already-decoded mapping into ResumeSections.

    A top-level "sections" key is unwrapped, so documents may either be the
    sections mapping itself or carry it next to other metadata.
    """
    if not isinstance(data, dict):
        raise ResumeDataError(f"Résumé data must be a mapping, got {type(data).__name__}")
    if isinstance(data.get("sections"), dict):
        data = data["sections"]
    try:
        return ResumeSections.model_validate(data)
    except ValidationError as e:
        raise ResumeDataError(f"Invalid résumé data: {e}") from e


def load_resume_sections(path: Path) -> ResumeSections:
    """
    Load résumé sections from a YAML or JSON file.

    Args:
        path: Path to the data file

    Returns:
        Validated ResumeSections

    Raises:
        ResumeDataError: If the file is missing, undecodable or does not match the schema
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ResumeDataError(f"Résumé data file not found: {path}") from e
    except OSError as e:
        raise ResumeDataError(f"{path}: Error reading file - {e}") from e

    data = _parse_document(path, text)
    if data is None:
        data = {}
    try:
        sections = parse_resume_sections(data)
    except ResumeDataError as e:
        raise ResumeDataError(f"{path}: {e}") from e
    logger.info(f"Loaded résumé sections from {path}")
    return sections
