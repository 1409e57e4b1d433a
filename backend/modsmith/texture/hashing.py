"""
Seeded hash - the only source of variation in texture synthesis

h starts at 0 and, for each UTF-16 code unit c of the input, becomes
(h * 31 + c) mod 2**32. The result is an unsigned 32-bit integer. Any other
implementation must reproduce it bit for bit: every palette pick, noise
sample and content hash depends on it.
"""

_MASK_32 = 0xFFFFFFFF


def _utf16_code_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def seed_hash(text: str) -> int:
    """Return the unsigned 32-bit polynomial hash of text."""
    h = 0
    for unit in _utf16_code_units(text):
        h = (h * 31 + unit) & _MASK_32
    return h


def pick(seed: str, length: int) -> int:
    """Deterministic index in [0, length) for seed."""
    return seed_hash(seed) % max(1, length)


__all__ = ["seed_hash", "pick"]
