"""Per-channel amplitude normalisation (PCAN) automatic gain control in fixed point."""

from __future__ import annotations

from collections.abc import Sequence

from microsignal.fixed_point import most_significant_bit32

__all__ = [
    "PCAN_SNR_BITS",
    "PCAN_OUTPUT_BITS",
    "wide_dynamic_function",
    "pcan_shrink",
    "apply_pcan_auto_gain_control_fixed",
]

PCAN_SNR_BITS = 12
PCAN_OUTPUT_BITS = 6

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF


def _to_int32(value: int) -> int:
    return ((value + 0x80000000) & _UINT32_MASK) - 0x80000000


def _to_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _check_uint32(value: int, what: str) -> int:
    if not 0 <= value <= _UINT32_MASK:
        raise ValueError(f"{what} {value} is not an unsigned 32-bit integer")
    return value


def wide_dynamic_function(x: int, lut: Sequence[int]) -> int:
    """Evaluate the piecewise quadratic gain curve stored in ``lut`` at ``x``.

    Values up to 2 are looked up directly. Larger values select a segment of
    three coefficients by the position of their highest set bit and
    interpolate with the ten bits below it.
    """
    _check_uint32(x, "x")
    if x <= 2:
        return lut[x]
    interval = most_significant_bit32(x)
    offset = 4 * interval - 6
    if interval < 11:
        frac = (x << (11 - interval)) & _UINT32_MASK
    else:
        frac = x >> (interval - 11)
    frac &= 0x3FF
    c0, c1, c2 = lut[offset], lut[offset + 1], lut[offset + 2]
    result = _to_int32(c2 * frac) >> 5
    result = _to_int32(result + _to_int32((c1 & _UINT32_MASK) << 5))
    result = _to_int32(result * frac)
    result = _to_int32(result + (1 << 14)) >> 15
    result += c0
    return _to_int16(result)


def pcan_shrink(x: int) -> int:
    """Soft-threshold a signal-to-noise ratio.

    ``x`` has ``PCAN_SNR_BITS`` fractional bits and the result has
    ``PCAN_OUTPUT_BITS``: ``x**2 / 4`` below 2 and ``x - 1`` from 2 on.
    """
    _check_uint32(x, "x")
    if x < (2 << PCAN_SNR_BITS):
        return ((x * x) & _UINT32_MASK) >> (2 + 2 * PCAN_SNR_BITS - PCAN_OUTPUT_BITS)
    return ((x >> (PCAN_SNR_BITS - PCAN_OUTPUT_BITS)) - (1 << PCAN_OUTPUT_BITS)) & _UINT32_MASK


def apply_pcan_auto_gain_control_fixed(
    gain_lut: Sequence[int],
    snr_shift: int,
    noise_estimate: Sequence[int],
    filterbank_output: Sequence[int],
) -> list[int]:
    """Normalise each filter bank channel by a gain derived from its noise estimate.

    Returns the new channel values; the arguments are left unchanged.
    """
    if len(noise_estimate) != len(filterbank_output):
        raise ValueError(
            f"{len(noise_estimate)} noise estimates for "
            f"{len(filterbank_output)} channels"
        )
    if snr_shift < 0:
        raise ValueError(f"snr_shift must not be negative, got {snr_shift}")
    result: list[int] = []
    for noise, channel in zip(noise_estimate, filterbank_output):
        _check_uint32(channel, "channel value")
        gain = wide_dynamic_function(noise, gain_lut) & _UINT32_MASK
        snr = (((channel * gain) & _UINT64_MASK) >> snr_shift) & _UINT32_MASK
        result.append(pcan_shrink(snr))
    return result