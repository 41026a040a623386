"""Mel-style filter bank: channel accumulation, log compression and square root."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from microsignal.fixed_point import log32, sqrt64

__all__ = [
    "FilterbankConfig",
    "filterbank_accumulate_channels",
    "filterbank_log",
    "filterbank_sqrt",
]

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


def _check_uint(value: int, bits: int, what: str) -> int:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{what} {value} is not an unsigned {bits}-bit integer")
    return value


@dataclass(frozen=True)
class FilterbankConfig:
    """Layout and weights of a bank of triangular filters.

    ``channel_frequency_starts``, ``channel_weight_starts`` and
    ``channel_widths`` each hold ``num_channels + 1`` entries; the first
    entry describes a scratch channel whose output is discarded.
    ``weights`` and ``unweights`` are 16-bit filter coefficients, where each
    unweight is one minus the matching weight.
    """

    num_channels: int
    channel_frequency_starts: Sequence[int]
    channel_weight_starts: Sequence[int]
    channel_widths: Sequence[int]
    weights: Sequence[int]
    unweights: Sequence[int]
    output_scale: int = 1
    input_correction_bits: int = 0

    def __post_init__(self) -> None:
        if self.num_channels < 0:
            raise ValueError(
                f"num_channels must not be negative, got {self.num_channels}"
            )
        expected = self.num_channels + 1
        for name in (
            "channel_frequency_starts",
            "channel_weight_starts",
            "channel_widths",
        ):
            values = tuple(getattr(self, name))
            if len(values) != expected:
                raise ValueError(
                    f"{name} must hold {expected} entries, got {len(values)}"
                )
            if any(v < 0 for v in values):
                raise ValueError(f"{name} must not hold negative entries")
            object.__setattr__(self, name, values)
        for name in ("weights", "unweights"):
            values = tuple(getattr(self, name))
            for v in values:
                if not _INT16_MIN <= v <= _INT16_MAX:
                    raise ValueError(f"{name} entry {v} is outside the 16-bit range")
            object.__setattr__(self, name, values)
        if len(self.weights) != len(self.unweights):
            raise ValueError("weights and unweights must be the same length")


def filterbank_accumulate_channels(
    config: FilterbankConfig, spectrum: Sequence[int]
) -> list[int]:
    """Accumulate energy bins into filter bank channels.

    Returns ``num_channels + 1`` unsigned 64-bit values. Element 0 is
    scratch space and should be ignored; elements 1 onwards are the channels.
    The energy of each bin is split between two adjacent channels: the
    weighted part goes to the current channel and the unweighted part to
    the next one.
    """
    for value in spectrum:
        _check_uint(value, 32, "spectrum value")
    outputs: list[int] = []
    weight_accumulator = 0
    unweight_accumulator = 0
    for freq_start, weight_start, width in zip(
        config.channel_frequency_starts,
        config.channel_weight_starts,
        config.channel_widths,
    ):
        bins = spectrum[freq_start:freq_start + width]
        weights = config.weights[weight_start:weight_start + width]
        unweights = config.unweights[weight_start:weight_start + width]
        if len(bins) != width:
            raise IndexError(
                f"band starting at {freq_start} of width {width} "
                f"runs past the spectrum of {len(spectrum)} bins"
            )
        if len(weights) != width:
            raise IndexError(
                f"weights starting at {weight_start} of width {width} "
                f"run past the {len(config.weights)} weights"
            )
        for energy, weight, unweight in zip(bins, weights, unweights):
            weight_accumulator = (
                weight_accumulator + (weight & _UINT64_MASK) * energy
            ) & _UINT64_MASK
            unweight_accumulator = (
                unweight_accumulator + (unweight & _UINT64_MASK) * energy
            ) & _UINT64_MASK
        outputs.append(weight_accumulator)
        weight_accumulator = unweight_accumulator
        unweight_accumulator = 0
    return outputs


def filterbank_log(
    values: Iterable[int], output_scale: int, correction_bits: int
) -> list[int]:
    """Scaled natural log of each channel, clipped to the 16-bit maximum.

    Each value is first shifted left by ``correction_bits`` within 32 bits;
    a shifted value of 0 or 1 yields 0.
    """
    if correction_bits < 0:
        raise ValueError(f"correction_bits must not be negative, got {correction_bits}")
    scale = output_scale & _UINT32_MASK
    outputs: list[int] = []
    for value in values:
        _check_uint(value, 32, "channel value")
        scaled = (value << correction_bits) & _UINT32_MASK
        if scaled > 1:
            outputs.append(min(log32(scaled, scale), _INT16_MAX))
        else:
            outputs.append(0)
    return outputs


def filterbank_sqrt(values: Iterable[int], scale_down_bits: int) -> list[int]:
    """Rounded square root of each 64-bit channel, shifted right by ``scale_down_bits``."""
    if scale_down_bits < 0:
        raise ValueError(f"scale_down_bits must not be negative, got {scale_down_bits}")
    return [sqrt64(_check_uint(v, 64, "channel value")) >> scale_down_bits for v in values]