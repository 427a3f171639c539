"""Codec header models.

Each identification header model carries a ``codec`` literal so that
``StreamInfo`` works as a tagged union: pydantic picks the right model from
that field when loading a dumped record.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import CodecType


class VorbisInfo(BaseModel):
    """Vorbis identification header."""

    codec: Literal[CodecType.VORBIS] = CodecType.VORBIS
    version: int = 0
    channels: int
    sample_rate: int
    bitrate_maximum: int = 0
    bitrate_nominal: int = 0
    bitrate_minimum: int = 0
    blocksize_0: int | None = None
    blocksize_1: int | None = None


class OpusInfo(BaseModel):
    """Opus identification header (RFC 7845 section 5.1)."""

    codec: Literal[CodecType.OPUS] = CodecType.OPUS
    version: int
    channels: int
    pre_skip: int
    input_sample_rate: int
    output_gain: int = 0
    channel_mapping_family: int = 0
    stream_count: int | None = None
    coupled_count: int | None = None
    channel_mapping: list[int] = Field(default_factory=list)

    @property
    def version_major(self) -> int:
        return self.version >> 4

    @property
    def version_minor(self) -> int:
        return self.version & 0x0F

    @property
    def output_gain_db(self) -> float:
        """Output gain in dB (stored as Q7.8 fixed point)."""
        return self.output_gain / 256.0

    @property
    def sample_rate(self) -> int:
        """Opus always decodes at 48 kHz; the input rate is informational."""
        return 48000


class TheoraInfo(BaseModel):
    """Theora identification header (Theora spec section 6.2)."""

    codec: Literal[CodecType.THEORA] = CodecType.THEORA
    version_major: int
    version_minor: int
    version_revision: int
    frame_width_mbs: int
    frame_height_mbs: int
    picture_width: int
    picture_height: int
    picture_x: int
    picture_y: int
    frame_rate_numerator: int
    frame_rate_denominator: int
    aspect_numerator: int
    aspect_denominator: int
    colorspace: int
    nominal_bitrate: int
    quality: int
    keyframe_granule_shift: int
    pixel_format: int

    @property
    def version(self) -> str:
        return f"{self.version_major}.{self.version_minor}.{self.version_revision}"

    @property
    def frame_width(self) -> int:
        return self.frame_width_mbs * 16

    @property
    def frame_height(self) -> int:
        return self.frame_height_mbs * 16

    @property
    def frame_rate(self) -> float | None:
        if not self.frame_rate_denominator:
            return None
        return self.frame_rate_numerator / self.frame_rate_denominator


class SpeexInfo(BaseModel):
    """Speex header (Speex manual, Ogg mapping)."""

    codec: Literal[CodecType.SPEEX] = CodecType.SPEEX
    version_string: str
    version_id: int
    header_size: int
    sample_rate: int
    mode: int
    mode_bitstream_version: int
    channels: int
    bitrate: int
    frame_size: int
    vbr: bool
    frames_per_packet: int
    extra_headers: int


StreamInfo = Annotated[
    Union[VorbisInfo, OpusInfo, TheoraInfo, SpeexInfo],
    Field(discriminator="codec"),
]


class UndecodableComment(BaseModel):
    """Comment entry that could not be read as ``KEY=VALUE`` UTF-8 text."""

    index: int
    raw: bytes
    key: str | None = None
    reason: str

    # Raw bytes are usually not valid UTF-8
    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")


class CommentHeader(BaseModel):
    """Vorbis comment block, shared by Vorbis and Opus.

    ``tags`` maps upper-cased keys to their values in the order they appear
    in the packet. Duplicate keys keep every value.
    """

    vendor: str = ""
    tags: dict[str, list[str]] = Field(default_factory=dict)
    undecodable: list[UndecodableComment] = Field(default_factory=list)

    def add(self, key: str, value: str) -> None:
        self.tags.setdefault(key.upper(), []).append(value)

    def get(self, key: str) -> list[str]:
        """Return all values stored under ``key`` (case-insensitive)."""
        return self.tags.get(key.upper(), [])

    def first(self, key: str) -> str | None:
        values = self.get(key)
        return values[0] if values else None

    @property
    def title(self) -> str | None:
        return self.first("TITLE")

    @property
    def artist(self) -> str | None:
        return self.first("ARTIST")

    @property
    def album(self) -> str | None:
        return self.first("ALBUM")
