"""Fixed-point integer primitives: bit scanning, square roots, logarithms."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "most_significant_bit32",
    "most_significant_bit64",
    "sqrt32",
    "sqrt64",
    "log32",
    "max_abs16",
]

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1

_LOG_LUT = (
    0, 224, 442, 654, 861, 1063, 1259, 1450, 1636, 1817, 1992, 2163,
    2329, 2490, 2646, 2797, 2944, 3087, 3224, 3358, 3487, 3611, 3732, 3848,
    3960, 4068, 4172, 4272, 4368, 4460, 4549, 4633, 4714, 4791, 4864, 4934,
    5001, 5063, 5123, 5178, 5231, 5280, 5326, 5368, 5408, 5444, 5477, 5507,
    5533, 5557, 5578, 5595, 5610, 5622, 5631, 5637, 5640, 5641, 5638, 5633,
    5626, 5615, 5602, 5586, 5568, 5547, 5524, 5498, 5470, 5439, 5406, 5370,
    5332, 5291, 5249, 5203, 5156, 5106, 5054, 5000, 4944, 4885, 4825, 4762,
    4697, 4630, 4561, 4490, 4416, 4341, 4264, 4184, 4103, 4020, 3935, 3848,
    3759, 3668, 3575, 3481, 3384, 3286, 3186, 3084, 2981, 2875, 2768, 2659,
    2549, 2437, 2323, 2207, 2090, 1971, 1851, 1729, 1605, 1480, 1353, 1224,
    1094, 963, 830, 695, 559, 421, 282, 142, 0, 0,
)

_LOG_SEGMENTS_LOG2 = 7
_LOG_SCALE = 65536
_LOG_SCALE_LOG2 = 16
_LOG_COEFF = 45426


def _check_unsigned(value: int, bits: int, name: str) -> int:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must be an unsigned {bits}-bit integer, got {value}")
    return value


def most_significant_bit32(x: int) -> int:
    """Return the 1-based index of the highest set bit of a 32-bit value (32 for zero)."""
    _check_unsigned(x, 32, "x")
    return x.bit_length() if x else 32


def most_significant_bit64(x: int) -> int:
    """Return the 1-based index of the highest set bit of a 64-bit value (64 for zero)."""
    _check_unsigned(x, 64, "x")
    return x.bit_length() if x else 64


def _bitwise_sqrt(num: int, width: int, cap: int) -> int:
    max_bit_number = (width - num.bit_length()) | 1
    bit = 1 << (width - 1 - max_bit_number)
    iterations = (width - 1 - max_bit_number) // 2 + 1
    res = 0
    for _ in range(iterations):
        if num >= res + bit:
            num -= res + bit
            res = (res >> 1) + bit
        else:
            res >>= 1
        bit >>= 2
    # Round to nearest when there is room to do so.
    if num > res and res != cap:
        res += 1
    return res


def sqrt32(num: int) -> int:
    """Rounded integer square root of an unsigned 32-bit value."""
    _check_unsigned(num, 32, "num")
    if num == 0:
        return 0
    return _bitwise_sqrt(num, 32, 0xFFFF) & 0xFFFF


def sqrt64(num: int) -> int:
    """Rounded integer square root of an unsigned 64-bit value.

    Values that fit in 32 bits take the 32-bit path.
    """
    _check_unsigned(num, 64, "num")
    if (num >> 32) == 0:
        return sqrt32(num)
    return _bitwise_sqrt(num, 64, 0xFFFFFFFF) & _UINT32_MASK


def _log2_fraction_part32(x: int, log2x: int) -> int:
    frac = x - (1 << log2x)
    if log2x < _LOG_SCALE_LOG2:
        frac <<= _LOG_SCALE_LOG2 - log2x
    else:
        frac >>= log2x - _LOG_SCALE_LOG2
    base_seg = frac >> (_LOG_SCALE_LOG2 - _LOG_SEGMENTS_LOG2)
    seg_unit = (1 << _LOG_SCALE_LOG2) >> _LOG_SEGMENTS_LOG2
    c0 = _LOG_LUT[base_seg]
    c1 = _LOG_LUT[base_seg + 1]
    seg_base = seg_unit * base_seg
    rel_pos = ((c1 - c0) * (frac - seg_base)) >> _LOG_SCALE_LOG2
    return (frac + c0 + rel_pos) & _UINT32_MASK


def log32(x: int, out_scale: int) -> int:
    """Natural logarithm of a positive 32-bit integer, multiplied by ``out_scale``.

    Arithmetic wraps at 32 bits exactly as the fixed-point routine does.
    """
    _check_unsigned(x, 32, "x")
    _check_unsigned(out_scale, 32, "out_scale")
    if x == 0:
        raise ValueError("logarithm of zero is undefined")
    integer = most_significant_bit32(x) - 1
    fraction = _log2_fraction_part32(x, integer)
    log2 = ((integer << _LOG_SCALE_LOG2) + fraction) & _UINT32_MASK
    round_half = _LOG_SCALE // 2
    loge = ((_LOG_COEFF * log2 + round_half) >> _LOG_SCALE_LOG2) & _UINT32_MASK
    product = (out_scale * loge) & _UINT32_MASK
    return ((product + round_half) & _UINT32_MASK) >> _LOG_SCALE_LOG2


def _to_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def max_abs16(values: Iterable[int]) -> int:
    """Largest absolute value among 16-bit samples (0 for no samples).

    As in 16-bit arithmetic, the magnitude of -32768 wraps to -32768.
    """
    best = 0
    for value in values:
        if not _INT16_MIN <= value <= _INT16_MAX:
            raise ValueError(f"sample {value} is outside the 16-bit range")
        if value > best:
            best = value
        elif -value > best:
            best = _to_int16(-value)
    return best