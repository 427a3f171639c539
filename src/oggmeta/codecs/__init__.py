"""Codec detection and header decoders for oggmeta."""

from oggmeta.codecs.base import BaseHeaderDecoder, PacketCursor
from oggmeta.codecs.comment import read_comment_block
from oggmeta.codecs.detect import SIGNATURES, detect_codec
from oggmeta.codecs.opus import OpusDecoder
from oggmeta.codecs.speex import SpeexDecoder
from oggmeta.codecs.theora import TheoraDecoder
from oggmeta.codecs.vorbis import VorbisDecoder
from oggmeta.models import CodecType

_DECODERS: dict[CodecType, type[BaseHeaderDecoder]] = {
    decoder_cls.codec: decoder_cls
    for decoder_cls in (VorbisDecoder, OpusDecoder, TheoraDecoder, SpeexDecoder)
}


def get_decoder(codec: CodecType) -> BaseHeaderDecoder | None:
    """Return a decoder instance for ``codec``, or None if it has none."""
    decoder_cls = _DECODERS.get(codec)
    return decoder_cls() if decoder_cls is not None else None


def get_supported_codecs() -> list[CodecType]:
    """Return the codecs that have a header decoder."""
    return list(_DECODERS)


__all__ = [
    # Base class
    "BaseHeaderDecoder",
    "PacketCursor",
    # Decoders
    "VorbisDecoder",
    "OpusDecoder",
    "TheoraDecoder",
    "SpeexDecoder",
    # Functions
    "detect_codec",
    "get_decoder",
    "get_supported_codecs",
    "read_comment_block",
    "SIGNATURES",
]
