import pytest

from microsignal.overlap_add import overlap_add_float, overlap_add_int16


def test_int16_first_frame_passes_through():
    frame = [10, -20, 30, -40]
    output, buffer = overlap_add_int16(frame, [0, 0, 0, 0], 2)
    assert output == [10, -20]
    assert buffer == [30, -40, 0, 0]


def test_int16_saturates_high_and_low():
    output, buffer = overlap_add_int16([30000, -30000], [30000, -30000], 2)
    assert output == [32767, -32768]
    assert buffer == [0, 0]


def test_int16_buffer_keeps_length():
    output, buffer = overlap_add_int16([1, 2, 3, 4, 5], [5, 4, 3, 2, 1], 3)
    assert len(output) == 3
    assert len(buffer) == 5
    assert buffer[-3:] == [0, 0, 0]


def test_int16_steady_state_sums_overlapping_frames():
    buffer = [0, 0, 0, 0]
    outputs = []
    for _ in range(4):
        output, buffer = overlap_add_int16([1, 1, 1, 1], buffer, 2)
        outputs.append(output)
    assert outputs[0] == [1, 1]
    assert all(o == [2, 2] for o in outputs[1:])


def test_int16_does_not_modify_arguments():
    frame = [1, 2]
    held = [3, 4]
    overlap_add_int16(frame, held, 1)
    assert frame == [1, 2]
    assert held == [3, 4]


def test_int16_rejects_out_of_range_sample():
    with pytest.raises(ValueError):
        overlap_add_int16([40000], [0], 1)


def test_float_overlap_add():
    frame = [0.5, 1.5, -2.0]
    output, buffer = overlap_add_float(frame, [1.0, 1.0, 1.0], 1)
    assert output == [1.5]
    assert buffer == [2.5, -1.0, 0.0]


def test_float_has_no_saturation():
    output, _ = overlap_add_float([30000.0], [30000.0], 1)
    assert output == [60000.0]


def test_full_output_empties_buffer():
    output, buffer = overlap_add_float([1.0, 2.0], [0.0, 0.0], 2)
    assert output == [1.0, 2.0]
    assert buffer == [0.0, 0.0]


def test_size_mismatch():
    with pytest.raises(ValueError):
        overlap_add_int16([1, 2], [1], 1)
    with pytest.raises(ValueError):
        overlap_add_float([1.0], [1.0, 2.0], 1)


def test_output_size_out_of_range():
    with pytest.raises(ValueError):
        overlap_add_int16([1, 2], [0, 0], 3)
    with pytest.raises(ValueError):
        overlap_add_float([1.0], [0.0], -1)