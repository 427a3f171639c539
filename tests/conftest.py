"""Pytest configuration and fixtures."""

import io

import pytest

from oggmeta.config import ScanConfig, reset_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Isolate tests from OGGMETA_* variables and user config files."""
    for name in ("VERIFY_CRC", "STOP_EARLY", "IDLE_PAGES", "MAX_SEGMENTS"):
        monkeypatch.delenv(f"OGGMETA_{name}", raising=False)
    monkeypatch.setattr("oggmeta.config.CONFIG_LOCATIONS", [tmp_path / "missing.yaml"])
    reset_config()
    yield
    reset_config()


@pytest.fixture
def scan_config() -> ScanConfig:
    """Default scan configuration (scan to end, no CRC check)."""
    return ScanConfig()


@pytest.fixture
def as_stream():
    """Turn a list of page byte strings into a readable binary stream."""

    def _as_stream(pages: list[bytes]) -> io.BytesIO:
        return io.BytesIO(b"".join(pages))

    return _as_stream
