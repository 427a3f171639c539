"""Tests for the command-line interface."""

import json

import pytest

from oggmeta import __version__
from oggmeta.cli import main
from oggbuild import vorbis_stream


@pytest.fixture
def song(tmp_path):
    path = tmp_path / "song.ogg"
    path.write_bytes(b"".join(vorbis_stream(comments=["TITLE=Song"])))
    return str(path)


def test_default_output(song, capsys):
    """Test the default report is printed and the exit code is 0."""
    assert main([song]) == 0
    out = capsys.readouterr().out
    assert "File: song.ogg" in out
    assert "TITLE=Song" in out


def test_quiet(song, capsys):
    assert main(["-q", song]) == 0
    assert capsys.readouterr().out.strip() == "song.ogg | vorbis 2ch 44100Hz | Song"


def test_json(song, capsys):
    assert main(["--json", "--full", song]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["streams"][0]["codec"] == "vorbis"
    assert data["stopped_early"] is False


def test_output_file(song, tmp_path, capsys):
    """Test -o writes a JSON array report."""
    report = tmp_path / "report.json"
    assert main(["-q", "-o", str(report), song]) == 0

    data = json.loads(report.read_text(encoding="utf-8"))
    assert [d["file_info"]["filename"] for d in data] == ["song.ogg"]
    assert "Report saved to" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    """Test a missing file is reported on stderr with exit code 1."""
    assert main([str(tmp_path / "missing.ogg")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_broken_file_exit_code(tmp_path, capsys):
    """Test a structural error gives exit code 1 but still prints the report."""
    path = tmp_path / "broken.ogg"
    path.write_bytes(b"".join(vorbis_stream()) + b"Ogg")

    assert main(["-q", str(path)]) == 1
    assert "error: TruncatedInput" in capsys.readouterr().out


def test_strict_mode(tmp_path, capsys):
    """Test strict mode reports the error instead of partial results."""
    path = tmp_path / "broken.ogg"
    path.write_bytes(b"junk" * 20)

    assert main(["--strict", str(path)]) == 1
    captured = capsys.readouterr()
    assert "OggS" in captured.err
    assert "File:" not in captured.out


def test_verify_crc(tmp_path, capsys):
    """Test --verify-crc turns a corrupted page into an error."""
    data = bytearray(b"".join(vorbis_stream()))
    data[-1] ^= 0xFF
    path = tmp_path / "corrupt.ogg"
    path.write_bytes(bytes(data))

    assert main(["-q", str(path)]) == 0
    assert main(["-q", "--verify-crc", str(path)]) == 1
    assert "error: ChecksumMismatch" in capsys.readouterr().out


def test_status(capsys):
    assert main(["--status"]) == 0
    out = capsys.readouterr().out
    for codec in ("vorbis", "opus", "theora", "speex"):
        assert codec in out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_files():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
