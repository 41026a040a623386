import pytest

from microsignal.spectrum import apply_window, fft_auto_scale, spectrum_to_energy

# Leading samples of the 512-point auto-scale reference data; the reference
# output equals the input because the peak already uses the full 16-bit range.
AUTO_SCALE_INPUT = [
    27728, 28180, -23037, -999, 7627, 19097, 4809, -28251, 25421,
    21584, 5775, -514, 31389, -13221, 28700, 3928, -32678, 9413,
    21553, -11903, 19367, 18168, 3923, 13968, -19808, -8946, 9707,
    4996, -2033, 26133, 8465, -29982, 145, 4190, -27992, 18817,
]
AUTO_SCALE_GOLDEN = [
    27728, 28180, -23037, -999, 7627, 19097, 4809, -28251, 25421,
    21584, 5775, -514, 31389, -13221, 28700, 3928, -32678, 9413,
    21553, -11903, 19367, 18168, 3923, 13968, -19808, -8946, 9707,
    4996, -2033, 26133, 8465, -29982, 145, 4190, -27992, 18817,
]


def test_fft_auto_scale_reference_data():
    output, scale_bits = fft_auto_scale(AUTO_SCALE_INPUT)
    assert output == AUTO_SCALE_GOLDEN
    assert scale_bits == 0


def test_fft_auto_scale_small_values():
    output, scale_bits = fft_auto_scale([1, -2, 3])
    assert scale_bits == 13
    assert output == [8192, -16384, 24576]


def test_fft_auto_scale_all_zero():
    output, scale_bits = fft_auto_scale([0, 0, 0])
    assert output == [0, 0, 0]
    assert scale_bits == 0


def test_fft_auto_scale_peak_uses_top_bit():
    output, scale_bits = fft_auto_scale([100, -37, 12])
    peak = max(abs(v) for v in output)
    assert 1 << 14 <= peak <= 32767
    assert output == [v << scale_bits for v in [100, -37, 12]]


def test_fft_auto_scale_rejects_out_of_range():
    with pytest.raises(ValueError):
        fft_auto_scale([40000])


def test_spectrum_to_energy_range():
    spectrum = [(1, 1), (3, 4), (-3, -4), (0, 2)]
    assert spectrum_to_energy(spectrum, 1, 3) == [25, 25]
    assert spectrum_to_energy(spectrum, 0, 4) == [2, 25, 25, 4]
    assert spectrum_to_energy(spectrum, 2, 2) == []


def test_spectrum_to_energy_extreme_values_wrap_to_unsigned():
    assert spectrum_to_energy([(-32768, -32768)], 0, 1) == [1 << 31]


def test_spectrum_to_energy_bad_range():
    with pytest.raises(IndexError):
        spectrum_to_energy([(1, 1)], 0, 2)
    with pytest.raises(IndexError):
        spectrum_to_energy([(1, 1)], 1, 0)


def test_apply_window_shift_and_saturation():
    assert apply_window([100, -100], [2, 2], 1) == [100, -100]
    assert apply_window([32767, -32768], [32767, 32767], 0) == [32767, -32768]


def test_apply_window_unit_window_identity():
    samples = [5, -7, 1200, -32768, 32767]
    assert apply_window(samples, [1 << 14] * len(samples), 14) == samples


def test_apply_window_length_mismatch():
    with pytest.raises(ValueError):
        apply_window([1, 2], [1], 0)


def test_apply_window_negative_shift():
    with pytest.raises(ValueError):
        apply_window([1], [1], -1)