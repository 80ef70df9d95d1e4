"""FNV-1a 32-bit string hashing."""

_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_MASK32 = 0xFFFFFFFF


def strhash(data: str | bytes | None) -> int:
    """Return the 32-bit FNV-1a hash of ``data``; ``None`` hashes to 0.

    Text is hashed as its UTF-8 encoding.
    """
    if data is None:
        return 0
    if isinstance(data, str):
        data = data.encode("utf-8")
    value = _FNV_OFFSET_BASIS
    for byte in data:
        value = ((value ^ byte) * _FNV_PRIME) & _MASK32
    return value