"""Little-endian integer packing used by binary reference blobs."""

import struct

_LE16 = struct.Struct("<H")
_LE32 = struct.Struct("<I")


def _decode(fmt: struct.Struct, buf: bytes, offset: int) -> int:
    if offset < 0 or offset + fmt.size > len(buf):
        raise ValueError(
            f"need {fmt.size} bytes at offset {offset}, buffer holds {len(buf)}"
        )
    return fmt.unpack_from(buf, offset)[0]


def decode_le16(buf: bytes, offset: int = 0) -> int:
    """Read an unsigned 16-bit little-endian integer at ``offset``."""
    return _decode(_LE16, buf, offset)


def decode_le32(buf: bytes, offset: int = 0) -> int:
    """Read an unsigned 32-bit little-endian integer at ``offset``."""
    return _decode(_LE32, buf, offset)


def encode_le16(value: int) -> bytes:
    """Pack ``value`` into 2 little-endian bytes, keeping the low 16 bits."""
    return _LE16.pack(value & 0xFFFF)


def encode_le32(value: int) -> bytes:
    """Pack ``value`` into 4 little-endian bytes, keeping the low 32 bits."""
    return _LE32.pack(value & 0xFFFFFFFF)