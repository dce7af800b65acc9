"""Centralized path management for the rirekisho layout solver.

All default locations should be imported from this module to ensure consistency.
"""
from __future__ import annotations

from pathlib import Path

# Resolve once, reuse everywhere
PROJECT_ROOT = Path(__file__).resolve().parents[2]
OUTPUT_DIR = PROJECT_ROOT / "output"
LOG_DIR = OUTPUT_DIR / "logs"
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "rirekisho.yaml"
