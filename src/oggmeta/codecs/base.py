"""Base header decoder and packet cursor."""

import struct
from abc import ABC, abstractmethod
from typing import ClassVar

from oggmeta.container.demux import Packet
from oggmeta.errors import MalformedHeader
from oggmeta.models import CodecType, Completeness, MetadataRecord


class PacketCursor:
    """Sequential reader over the bytes of one header packet.

    Every read that would run past the end of the packet raises
    MalformedHeader carrying the stream serial and packet offset.

    Args:
        packet: Packet to read
        start: Position to start reading at (usually just after the signature)
        byteorder: struct byte order prefix, ``"<"`` or ``">"``
    """

    def __init__(self, packet: Packet, start: int = 0, byteorder: str = "<"):
        self.packet = packet
        self.data = packet.data
        self.pos = start
        self.byteorder = byteorder

    @property
    def remaining(self) -> int:
        return max(len(self.data) - self.pos, 0)

    def error(self, message: str) -> MalformedHeader:
        return MalformedHeader(message, self.packet.serial, self.packet.offset)

    def unpack(self, fmt: str, what: str = "header field") -> tuple:
        fmt = self.byteorder + fmt
        size = struct.calcsize(fmt)
        if size > self.remaining:
            raise self.error(
                f"Packet too short reading {what}: need {size} bytes at position "
                f"{self.pos}, {self.remaining} left"
            )
        values = struct.unpack_from(fmt, self.data, self.pos)
        self.pos += size
        return values

    def read(self, size: int, what: str = "data") -> bytes:
        if size > self.remaining:
            raise self.error(
                f"Packet too short reading {what}: need {size} bytes at position "
                f"{self.pos}, {self.remaining} left"
            )
        data = self.data[self.pos : self.pos + size]
        self.pos += size
        return data

    def u8(self, what: str = "byte") -> int:
        return self.unpack("B", what)[0]

    def u16(self, what: str = "uint16") -> int:
        return self.unpack("H", what)[0]

    def i16(self, what: str = "int16") -> int:
        return self.unpack("h", what)[0]

    def u24(self, what: str = "uint24") -> int:
        return int.from_bytes(self.read(3, what), "little" if self.byteorder == "<" else "big")

    def u32(self, what: str = "uint32") -> int:
        return self.unpack("I", what)[0]

    def i32(self, what: str = "int32") -> int:
        return self.unpack("i", what)[0]


class BaseHeaderDecoder(ABC):
    """Abstract base class for codec header decoders.

    A decoder reads the first ``header_count`` packets of a stream, in order,
    and fills in the stream's MetadataRecord. Non-fatal problems are recorded
    on the record with ``record.add_issue``; problems that make the rest of
    the headers unreadable are raised as StreamLocalError.

    Attributes:
        codec: Codec family handled by this decoder
        signature: Magic bytes the stream's first packet starts with
        header_count: Number of leading packets needed for metadata
        completeness: Completeness reached when every header decodes cleanly
    """

    codec: ClassVar[CodecType] = CodecType.UNKNOWN
    signature: ClassVar[bytes] = b""
    header_count: ClassVar[int] = 1
    completeness: ClassVar[Completeness] = Completeness.DETECTION_ONLY

    @abstractmethod
    def decode(self, index: int, packet: Packet, record: MetadataRecord) -> None:
        """Decode header packet number ``index`` into ``record``.

        Args:
            index: Position of the packet in the stream (0 = identification)
            packet: The reassembled packet
            record: Record to populate (modified in place)
        """
        pass

    def duration(self, record: MetadataRecord, granule_position: int) -> float | None:
        """Convert the stream's final granule position to seconds."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(codec={self.codec.value!r})"
