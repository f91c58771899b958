"""
Acceptance test fixtures — a click CliRunner inside an isolated working directory.

Every test runs in its own tmp_path with no .env file and no settings
variables exported, so the default ./out output directory lands there.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

_SETTINGS_ENV = (
    "OUTPUT_DIR",
    "DOCUMENT_NAME",
    "LOG_LEVEL",
    "READER__BACKEND",
    "READER__OPENSSL_BINARY",
    "EXTRACTION__MIN_BASE64_RUN",
)


@pytest.fixture()
def workdir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
