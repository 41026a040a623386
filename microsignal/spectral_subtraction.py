"""Noise reduction on filter bank channels by spectral subtraction."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = ["SpectralSubtractionConfig", "filterbank_spectral_subtraction"]

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class SpectralSubtractionConfig:
    """Parameters of the spectral subtraction filter.

    The smoothing coefficients and ``min_signal_remaining`` are fixed-point
    values with a scale of ``1 << spectral_subtraction_bits``. Even-index
    channels use ``smoothing``; odd-index channels use the alternate pair.
    """

    num_channels: int
    smoothing: int
    one_minus_smoothing: int
    min_signal_remaining: int
    alternate_smoothing: int
    alternate_one_minus_smoothing: int
    smoothing_bits: int
    spectral_subtraction_bits: int
    clamping: bool = False

    def __post_init__(self) -> None:
        if self.num_channels < 0:
            raise ValueError(
                f"num_channels must not be negative, got {self.num_channels}"
            )
        for name in (
            "smoothing",
            "one_minus_smoothing",
            "min_signal_remaining",
            "alternate_smoothing",
            "alternate_one_minus_smoothing",
            "smoothing_bits",
            "spectral_subtraction_bits",
        ):
            value = getattr(self, name)
            if not 0 <= value <= _UINT32_MASK:
                raise ValueError(f"{name} must be an unsigned 32-bit integer, got {value}")


def filterbank_spectral_subtraction(
    config: SpectralSubtractionConfig,
    values: Sequence[int],
    noise_estimate: Sequence[int],
) -> tuple[list[int], list[int]]:
    """Subtract a running noise estimate from each channel.

    Returns the cleaned channels and the updated noise estimate as new
    lists; the arguments are left unchanged.
    """
    count = config.num_channels
    if len(values) != count:
        raise ValueError(f"expected {count} channel values, got {len(values)}")
    if len(noise_estimate) != count:
        raise ValueError(f"expected {count} noise estimates, got {len(noise_estimate)}")

    smoothing_bits = config.smoothing_bits
    shift = config.spectral_subtraction_bits
    output: list[int] = []
    new_noise: list[int] = []
    for i, (signal, noise) in enumerate(zip(values, noise_estimate)):
        if not 0 <= signal <= _UINT32_MASK:
            raise ValueError(f"channel value {signal} is not an unsigned 32-bit integer")
        if not 0 <= noise <= _UINT32_MASK:
            raise ValueError(f"noise estimate {noise} is not an unsigned 32-bit integer")
        if i % 2 == 0:
            smoothing = config.smoothing
            one_minus_smoothing = config.one_minus_smoothing
        else:
            smoothing = config.alternate_smoothing
            one_minus_smoothing = config.alternate_one_minus_smoothing

        signal_scaled_up = (signal << smoothing_bits) & _UINT32_MASK
        mixed = (signal_scaled_up * smoothing + noise * one_minus_smoothing) & _UINT64_MASK
        noise = (mixed >> shift) & _UINT32_MASK

        estimate_scaled_up = noise
        # The estimate may never exceed the signal, so the difference stays non-negative.
        if estimate_scaled_up > signal_scaled_up:
            estimate_scaled_up = signal_scaled_up
            if config.clamping:
                noise = estimate_scaled_up

        floor = (((signal * config.min_signal_remaining) & _UINT64_MASK) >> shift) & _UINT32_MASK
        subtracted = (signal_scaled_up - estimate_scaled_up) >> smoothing_bits
        output.append(max(subtracted, floor))
        new_noise.append(noise)
    return output, new_noise