"""Tests for configuration loading."""

import pytest

from oggmeta.config import OggMetaConfig, ScanConfig, get_config, load_config, reset_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point config discovery at a file in tmp_path and return its path."""
    path = tmp_path / "config.yaml"
    monkeypatch.setattr("oggmeta.config.CONFIG_LOCATIONS", [path])
    return path


def test_defaults():
    """Test defaults when no file or environment is set."""
    config = load_config()

    assert isinstance(config, OggMetaConfig)
    assert config.scan == ScanConfig()
    assert config.scan.verify_crc is False
    assert config.scan.stop_early is False
    assert config.scan.idle_pages == 16
    assert config.scan.max_segments == 255


def test_yaml_file(config_file):
    """Test values are read from the YAML file."""
    config_file.write_text("scan:\n  verify_crc: true\n  idle_pages: 4\n")

    scan = load_config().scan

    assert scan.verify_crc is True
    assert scan.idle_pages == 4
    assert scan.stop_early is False


def test_environment_overrides_file(config_file, monkeypatch):
    """Test OGGMETA_* variables take priority over the file."""
    config_file.write_text("scan:\n  verify_crc: true\n  max_segments: 100\n")
    monkeypatch.setenv("OGGMETA_VERIFY_CRC", "no")
    monkeypatch.setenv("OGGMETA_MAX_SEGMENTS", "32")
    monkeypatch.setenv("OGGMETA_STOP_EARLY", "on")

    scan = load_config().scan

    assert scan.verify_crc is False
    assert scan.max_segments == 32
    assert scan.stop_early is True


def test_invalid_yaml_is_ignored(config_file):
    """Test a broken config file falls back to defaults."""
    config_file.write_text("scan: [unclosed\n")
    assert load_config().scan == ScanConfig()


def test_first_existing_file_wins(tmp_path, monkeypatch):
    """Test the search stops at the first config file that exists."""
    user = tmp_path / "user.yaml"
    local = tmp_path / "local.yaml"
    local.write_text("scan:\n  idle_pages: 9\n")
    monkeypatch.setattr("oggmeta.config.CONFIG_LOCATIONS", [user, local])

    assert load_config().scan.idle_pages == 9

    user.write_text("scan:\n  idle_pages: 2\n")
    assert load_config().scan.idle_pages == 2


def test_empty_file(config_file):
    """Test an empty config file gives defaults."""
    config_file.write_text("")
    assert load_config().scan == ScanConfig()


def test_get_config_is_cached(monkeypatch):
    """Test the global config is loaded once until reset."""
    first = get_config()
    monkeypatch.setenv("OGGMETA_IDLE_PAGES", "3")
    assert get_config() is first

    reset_config()
    assert get_config().scan.idle_pages == 3
