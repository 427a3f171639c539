"""Vorbis comment block, used by both the Vorbis and Opus comment headers.

Layout (all lengths little-endian uint32)::

    vendor_length, vendor_string,
    user_comment_list_length,
    (length, "KEY=value") * user_comment_list_length

See: https://xiph.org/vorbis/doc/v-comment.html
"""

import logging

from oggmeta.codecs.base import PacketCursor
from oggmeta.errors import MalformedComment
from oggmeta.models import CommentHeader, MetadataRecord, UndecodableComment

logger = logging.getLogger(__name__)


def read_comment_block(cursor: PacketCursor, record: MetadataRecord) -> CommentHeader:
    """Read a comment block into ``record.comments``.

    The CommentHeader is attached to the record before any entry is read, so
    entries parsed before a truncation are kept when MalformedHeader is
    raised part way through.

    Entries that are not ``KEY=VALUE`` or not valid UTF-8 are kept as raw
    bytes in ``comments.undecodable`` and recorded as MalformedComment
    issues. Reading continues with the next entry.

    Args:
        cursor: Cursor positioned at the vendor length field
        record: Record of the stream the packet belongs to

    Returns:
        The populated CommentHeader

    Raises:
        MalformedHeader: A length field runs past the end of the packet
    """
    comments = CommentHeader()
    record.comments = comments
    packet = cursor.packet

    vendor_length = cursor.u32("vendor length")
    vendor = cursor.read(vendor_length, "vendor string")
    try:
        comments.vendor = vendor.decode("utf-8")
    except UnicodeDecodeError:
        comments.vendor = vendor.decode("utf-8", errors="replace")
        record.add_issue(
            MalformedComment("Vendor string is not valid UTF-8", packet.serial, packet.offset)
        )

    count = cursor.u32("comment count")
    for index in range(count):
        length = cursor.u32(f"length of comment {index}")
        raw = cursor.read(length, f"comment {index}")
        entry = _split_entry(index, raw)
        if isinstance(entry, UndecodableComment):
            comments.undecodable.append(entry)
            record.add_issue(
                MalformedComment(
                    f"Comment {index} {entry.reason}", packet.serial, packet.offset
                )
            )
            logger.warning(
                "Stream %08x: comment %d %s", packet.serial, index, entry.reason
            )
            continue
        comments.add(*entry)

    return comments


def _split_entry(index: int, raw: bytes) -> tuple[str, str] | UndecodableComment:
    """Split one ``KEY=VALUE`` entry on its first ``=``."""
    key, sep, value = raw.partition(b"=")
    if not sep:
        return UndecodableComment(index=index, raw=raw, reason="has no '=' separator")
    try:
        key_text = key.decode("ascii")
    except UnicodeDecodeError:
        return UndecodableComment(index=index, raw=raw, reason="has a non-ASCII key")
    try:
        value_text = value.decode("utf-8")
    except UnicodeDecodeError:
        return UndecodableComment(
            index=index, raw=raw, key=key_text.upper(), reason="value is not valid UTF-8"
        )
    return key_text, value_text
