import math

import pytest

from microsignal.fixed_point import (
    log32,
    max_abs16,
    most_significant_bit32,
    most_significant_bit64,
    sqrt32,
    sqrt64,
)


@pytest.mark.parametrize("x", [1, 2, 3, 255, 256, 65535, 1 << 20, 0xFFFFFFFF])
def test_msb32_brackets_value(x):
    msb = most_significant_bit32(x)
    assert 2 ** (msb - 1) <= x < 2**msb


@pytest.mark.parametrize("x", [1, 7, 1 << 31, 1 << 32, (1 << 63) + 5, (1 << 64) - 1])
def test_msb64_brackets_value(x):
    msb = most_significant_bit64(x)
    assert 2 ** (msb - 1) <= x < 2**msb


def test_msb_of_zero_is_full_width():
    assert most_significant_bit32(0) == 32
    assert most_significant_bit64(0) == 64


def test_msb_rejects_out_of_range():
    with pytest.raises(ValueError):
        most_significant_bit32(1 << 32)
    with pytest.raises(ValueError):
        most_significant_bit64(-1)


@pytest.mark.parametrize("root", [0, 1, 2, 12, 1000, 65535])
def test_sqrt32_perfect_squares(root):
    assert sqrt32(root * root) == root


def test_sqrt32_caps_at_16_bits():
    assert sqrt32(0xFFFFFFFF) == 0xFFFF


@pytest.mark.parametrize("n", [1 << 32, (1 << 40) + 3, 10**15, 123456789012345])
def test_sqrt64_is_within_rounding(n):
    r = sqrt64(n)
    assert abs(r * r - n) <= r


def test_sqrt64_small_values_use_32_bit_path():
    for n in (0, 17, 40000, 0xFFFFFFFF):
        assert sqrt64(n) == sqrt32(n)


def test_sqrt64_perfect_square():
    assert sqrt64(3000000000 * 3000000000) == 3000000000


def test_sqrt64_caps_at_32_bits():
    assert sqrt64((1 << 64) - 1) == 0xFFFFFFFF


def test_sqrt_rejects_out_of_range():
    with pytest.raises(ValueError):
        sqrt32(1 << 32)
    with pytest.raises(ValueError):
        sqrt64(1 << 64)


def test_log32_of_one_is_zero():
    assert log32(1, 1000) == 0


@pytest.mark.parametrize("x", [2, 3, 10, 100, 1000, 65536, 123456, 10**9, 0xFFFFFFFF])
def test_log32_approximates_natural_log(x):
    assert abs(log32(x, 1000) - 1000 * math.log(x)) <= 2


def test_log32_is_monotonic():
    xs = [1, 2, 5, 17, 300, 4096, 70000, 1 << 24, 1 << 31]
    results = [log32(x, 1000) for x in xs]
    assert results == sorted(results)


def test_log32_scales_linearly():
    assert abs(log32(5000, 2000) - 2 * log32(5000, 1000)) <= 1


def test_log32_rejects_zero():
    with pytest.raises(ValueError):
        log32(0, 1000)


def test_max_abs16_empty_is_zero():
    assert max_abs16([]) == 0


@pytest.mark.parametrize(
    "values", [[3, -7, 5], [0, 0], [32767, -32767], [-1, -2, -3], [100]]
)
def test_max_abs16_matches_largest_magnitude(values):
    assert max_abs16(values) == max(abs(v) for v in values)


def test_max_abs16_accepts_generator():
    assert max_abs16(v - 10 for v in range(5)) == 10


def test_max_abs16_minimum_wraps():
    assert max_abs16([-32768]) == -32768


def test_max_abs16_rejects_out_of_range():
    with pytest.raises(ValueError):
        max_abs16([1, 40000])