"""Overlap-add reconstruction of a signal from overlapping frames."""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["overlap_add_int16", "overlap_add_float"]

_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


def _check_sizes(frame: Sequence, buffer: Sequence, output_size: int) -> None:
    if len(frame) != len(buffer):
        raise ValueError(
            f"frame has {len(frame)} samples but buffer has {len(buffer)}"
        )
    if not 0 <= output_size <= len(frame):
        raise ValueError(
            f"output_size {output_size} must lie between 0 and {len(frame)}"
        )


def _finish(summed: list, output_size: int, zero) -> tuple[list, list]:
    output = summed[:output_size]
    remaining = summed[output_size:] + [zero] * output_size
    return output, remaining


def overlap_add_int16(
    frame: Sequence[int], buffer: Sequence[int], output_size: int
) -> tuple[list[int], list[int]]:
    """Add a 16-bit frame into the buffer with saturation.

    Returns the first ``output_size`` summed samples and the new buffer: the
    remaining summed samples moved to the front, followed by zeros.
    """
    _check_sizes(frame, buffer, output_size)
    summed: list[int] = []
    for sample, held in zip(frame, buffer):
        for value in (sample, held):
            if not _INT16_MIN <= value <= _INT16_MAX:
                raise ValueError(f"sample {value} is outside the 16-bit range")
        summed.append(min(max(sample + held, _INT16_MIN), _INT16_MAX))
    return _finish(summed, output_size, 0)


def overlap_add_float(
    frame: Sequence[float], buffer: Sequence[float], output_size: int
) -> tuple[list[float], list[float]]:
    """Add a floating-point frame into the buffer, without saturation.

    Returns the output samples and the new buffer, as for the 16-bit form.
    """
    _check_sizes(frame, buffer, output_size)
    summed = [held + sample for sample, held in zip(frame, buffer)]
    return _finish(summed, output_size, 0.0)