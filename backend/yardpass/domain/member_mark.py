"""Member mark — a QR-looking decorative glyph derived from the pass id.

The mark is cosmetic: it encodes nothing and only needs to be reproducible
for a given id.
"""

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_XORSHIFT_ZERO_SEED = 0x9E3779B9

MARK_SIZE = 11
FINDER_SIZE = 3


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a over the UTF-16 code units of ``text``."""
    h = _FNV_OFFSET
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * _FNV_PRIME) & _MASK32
    return h


def pattern_bits(seed: str, n: int) -> list[bool]:
    """Return ``n`` on/off cells fully determined by ``seed`` (~33% on)."""
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")

    x = fnv1a_32(seed) or _XORSHIFT_ZERO_SEED
    bits: list[bool] = []
    for _ in range(n):
        x ^= (x << 13) & _MASK32
        x ^= x >> 17
        x ^= (x << 5) & _MASK32
        bits.append(x % 3 == 0)
    return bits


def is_finder_cell(row: int, col: int, size: int = MARK_SIZE) -> bool:
    """True for cells inside the top-left, top-right or bottom-left finder."""
    top = row < FINDER_SIZE
    left = col < FINDER_SIZE
    right = col >= size - FINDER_SIZE
    bottom = row >= size - FINDER_SIZE
    return (top and left) or (top and right) or (bottom and left)


def member_mark_grid(seed: str, size: int = MARK_SIZE) -> list[list[bool]]:
    """Build the ``size`` x ``size`` cell grid for the member mark."""
    bits = pattern_bits(seed, size * size)
    return [
        [is_finder_cell(row, col, size) or bits[row * size + col] for col in range(size)]
        for row in range(size)
    ]
