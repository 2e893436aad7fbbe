"""Shared fixtures for spectable tests."""

import os
import shutil
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def data_driven_source():
    """Source text of the data-driven specification fixture."""
    return (FIXTURES_DIR / "specs" / "DataDrivenSpec.groovy").read_text(encoding="utf-8")


@pytest.fixture
def report_xml():
    """Content of the XML report fixture."""
    return (FIXTURES_DIR / "reports" / "TEST-com.example.DataDrivenSpec.xml").read_text(encoding="utf-8")


@pytest.fixture
def workspace(tmp_path):
    """Workspace root with the XML report at its conventional location."""
    report_dir = tmp_path / "build" / "test-results" / "test"
    report_dir.mkdir(parents=True)
    shutil.copy(FIXTURES_DIR / "reports" / "TEST-com.example.DataDrivenSpec.xml", report_dir)
    return tmp_path


@pytest.fixture(autouse=True)
def _clear_spectable_env(monkeypatch):
    """Keep SPECTABLE_* variables from the caller's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("SPECTABLE_"):
            monkeypatch.delenv(name)
