"""Codec detection from the magic signature of a stream's first packet."""

from oggmeta.codecs.opus import IDENTIFICATION_SIGNATURE as OPUS_SIGNATURE
from oggmeta.codecs.speex import SIGNATURE as SPEEX_SIGNATURE
from oggmeta.codecs.theora import IDENTIFICATION_SIGNATURE as THEORA_SIGNATURE
from oggmeta.codecs.vorbis import IDENTIFICATION_SIGNATURE as VORBIS_SIGNATURE
from oggmeta.models import CodecType

SIGNATURES: dict[bytes, CodecType] = {
    VORBIS_SIGNATURE: CodecType.VORBIS,
    OPUS_SIGNATURE: CodecType.OPUS,
    THEORA_SIGNATURE: CodecType.THEORA,
    SPEEX_SIGNATURE: CodecType.SPEEX,
}


def detect_codec(data: bytes) -> CodecType:
    """Classify a stream from the bytes of its first packet.

    Args:
        data: First packet of the stream

    Returns:
        The matching CodecType, or CodecType.UNKNOWN when no signature matches
    """
    for signature, codec in SIGNATURES.items():
        if data.startswith(signature):
            return codec
    return CodecType.UNKNOWN
