"""Spectrum helpers: power from DFT bins, FFT input auto-scaling, windowing."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from microsignal.fixed_point import max_abs16, most_significant_bit32

__all__ = ["spectrum_to_energy", "fft_auto_scale", "apply_window"]

_UINT32_MASK = 0xFFFFFFFF
_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


def _to_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _check_int16(value: int, what: str) -> int:
    if not _INT16_MIN <= value <= _INT16_MAX:
        raise ValueError(f"{what} {value} is outside the 16-bit range")
    return value


def spectrum_to_energy(
    spectrum: Sequence[Sequence[int]], start_index: int, end_index: int
) -> list[int]:
    """Power of each DFT bin from ``start_index`` up to, not including, ``end_index``.

    Each bin is a ``(real, imag)`` pair of 16-bit values; the result for a
    bin is ``real**2 + imag**2`` as an unsigned 32-bit value.
    """
    if not 0 <= start_index <= end_index <= len(spectrum):
        raise IndexError(
            f"range [{start_index}, {end_index}) does not fit a spectrum "
            f"of {len(spectrum)} bins"
        )
    energies: list[int] = []
    for real, imag in spectrum[start_index:end_index]:
        _check_int16(real, "real part")
        _check_int16(imag, "imaginary part")
        energies.append((real * real + imag * imag) & _UINT32_MASK)
    return energies


def fft_auto_scale(values: Iterable[int]) -> tuple[list[int], int]:
    """Shift 16-bit samples left as far as possible without clipping.

    Returns the scaled samples and the number of bits they were shifted by.
    """
    samples = [_check_int16(v, "sample") for v in values]
    peak = max_abs16(samples)
    scale_bits = 16 - most_significant_bit32(peak & _UINT32_MASK) - 1
    if scale_bits <= 0:
        scale_bits = 0
    factor = 1 << scale_bits
    return [_to_int16(v * factor) for v in samples], scale_bits


def apply_window(
    values: Sequence[int], window: Sequence[int], shift: int
) -> list[int]:
    """Multiply samples by a window element by element, shift right and saturate."""
    if len(values) != len(window):
        raise ValueError(
            f"signal has {len(values)} samples but window has {len(window)}"
        )
    if shift < 0:
        raise ValueError(f"shift must not be negative, got {shift}")
    output: list[int] = []
    for sample, coefficient in zip(values, window):
        _check_int16(sample, "sample")
        _check_int16(coefficient, "window coefficient")
        raw = (sample * coefficient) >> shift
        output.append(min(max(raw, _INT16_MIN), _INT16_MAX))
    return output