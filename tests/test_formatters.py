"""Tests for output formatters."""

import base64
import json

import pytest

from oggmeta import analyze_file, scan_bytes
from oggmeta.formatters import (
    format_default,
    format_json,
    format_json_list,
    format_quiet,
    format_quiet_list,
    format_records_json,
    to_dict,
)
from oggbuild import opus_head, opus_tags, paginate, theora_ident, vorbis_stream


@pytest.fixture
def vorbis_file(tmp_path):
    path = tmp_path / "song.ogg"
    path.write_bytes(
        b"".join(vorbis_stream(serial=0xABCD, comments=["TITLE=Song", "ARTIST=Band"]))
    )
    return str(path)


@pytest.fixture
def movie_file(tmp_path):
    """Theora video with an Opus track carrying an undecodable comment."""
    path = tmp_path / "movie.ogv"
    theora = paginate([theora_ident(640, 360)], serial=1)
    opus = paginate([opus_head()], serial=2) + paginate(
        [opus_tags("libopus", [b"NOEQUALSIGN", "TITLE=Film"])],
        serial=2,
        start_sequence=1,
        bos=False,
    )
    path.write_bytes(b"".join(theora + opus))
    return str(path)


@pytest.fixture
def broken_file(tmp_path):
    path = tmp_path / "broken.ogg"
    path.write_bytes(b"".join(vorbis_stream()) + b"OggS")
    return str(path)


class TestQuiet:
    def test_single_stream(self, vorbis_file):
        line = format_quiet(analyze_file(vorbis_file))
        assert line == "song.ogg | vorbis 2ch 44100Hz | Song"

    def test_partial_stream(self, movie_file):
        line = format_quiet(analyze_file(movie_file))
        assert line == "movie.ogv | theora 640x360, opus 2ch 48000Hz (partial) | Film"

    def test_opus_input_rate(self, tmp_path):
        path = tmp_path / "speech.opus"
        pages = paginate([opus_head(1, input_sample_rate=16000)], serial=4) + paginate(
            [opus_tags()], serial=4, start_sequence=1, bos=False
        )
        path.write_bytes(b"".join(pages))

        line = format_quiet(analyze_file(str(path)))
        assert line == "speech.opus | opus 1ch 48000Hz (input 16000Hz)"

    def test_error(self, broken_file):
        line = format_quiet(analyze_file(broken_file))
        assert line.endswith("| error: TruncatedInput")

    def test_list(self, vorbis_file, broken_file):
        output = format_quiet_list([analyze_file(vorbis_file), analyze_file(broken_file)])
        assert len(output.splitlines()) == 2


class TestDefault:
    def test_stream_sections(self, vorbis_file):
        output = format_default(analyze_file(vorbis_file))

        assert "File: song.ogg" in output
        assert "## STREAM 0 (vorbis, serial 0000abcd)" in output
        assert "Status:       full" in output
        assert "Sample rate:  44100 Hz" in output
        assert "TITLE=Song" in output
        assert "ARTIST=Band" in output

    def test_issues_and_undecodable(self, movie_file):
        output = format_default(analyze_file(movie_file))

        assert "## STREAM 0 (theora, serial 00000001)" in output
        assert "Picture:      640x360" in output
        assert "[undecodable comment 0: 11 bytes]" in output
        assert "! MalformedComment" in output

    def test_error_section(self, broken_file):
        output = format_default(analyze_file(broken_file))
        assert "## ERROR" in output
        assert "TruncatedInput" in output


class TestJson:
    def test_format_json(self, vorbis_file):
        data = json.loads(format_json(analyze_file(vorbis_file)))

        assert data["file_info"]["filename"] == "song.ogg"
        (stream,) = data["streams"]
        assert stream["serial"] == 0xABCD
        assert stream["codec"] == "vorbis"
        assert stream["completeness"] == "full"
        assert stream["info"]["sample_rate"] == 44100
        assert stream["comments"]["tags"] == {"TITLE": ["Song"], "ARTIST": ["Band"]}
        assert data["error"] is None

    def test_undecodable_bytes_are_base64(self, movie_file):
        data = to_dict(analyze_file(movie_file))

        undecodable = data["streams"][1]["comments"]["undecodable"]
        assert base64.b64decode(undecodable[0]["raw"]) == b"NOEQUALSIGN"

    def test_format_json_list(self, vorbis_file, broken_file):
        output = format_json_list([analyze_file(vorbis_file), analyze_file(broken_file)])
        data = json.loads(output)

        assert [d["file_info"]["filename"] for d in data] == ["song.ogg", "broken.ogg"]
        assert data[1]["error"]["kind"] == "TruncatedInput"

    def test_format_records_json(self):
        records = scan_bytes(b"".join(vorbis_stream(serial=5, comments=[b"\xffbad"])))
        data = json.loads(format_records_json(records))

        (stream,) = data
        assert stream["serial"] == 5
        assert stream["completeness"] == "partial"
        assert base64.b64decode(stream["comments"]["undecodable"][0]["raw"]) == b"\xffbad"
        assert stream["issues"][0]["kind"] == "MalformedComment"
