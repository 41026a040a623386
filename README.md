# microsignal

Integer and fixed-point building blocks for audio feature extraction. These
are the steps between raw microphone samples and the features a
keyword-spotting model reads. Each routine works with the same bit widths,
shifts, wrap-around and rounding as a microcontroller front end. You can use
them to compute features offline that match the device output bit for bit.

## Installation

```
pip install microsignal
```

The package has no runtime dependencies. To run the test suite:

```
pip install "microsignal[test]"
pytest
```

## What is inside

| Module | Contents |
| --- | --- |
| `microsignal.fixed_point` | `most_significant_bit32`, `most_significant_bit64`, `sqrt32`, `sqrt64`, `log32`, `max_abs16` |
| `microsignal.circular_buffer` | `CircularBuffer`, a fixed-capacity ring of signed 16-bit samples |
| `microsignal.spectrum` | `spectrum_to_energy`, `fft_auto_scale`, `apply_window` |
| `microsignal.filter_bank` | `FilterbankConfig`, `filterbank_accumulate_channels`, `filterbank_sqrt`, `filterbank_log` |
| `microsignal.spectral_subtraction` | `SpectralSubtractionConfig`, `filterbank_spectral_subtraction` |
| `microsignal.pcan` | `PCAN_SNR_BITS`, `PCAN_OUTPUT_BITS`, `wide_dynamic_function`, `pcan_shrink`, `apply_pcan_auto_gain_control_fixed` |
| `microsignal.overlap_add` | `overlap_add_int16`, `overlap_add_float` |

## Examples

Integer math helpers:

```python
from microsignal.fixed_point import log32, max_abs16, sqrt64

sqrt64(1 << 40)              # 1048576
log32(1 << 16, 1 << 16)      # ln(65536) scaled by 65536, in fixed point
max_abs16([3, -7, 5])        # 7
```

Buffering incoming samples and taking overlapping frames:

```python
from microsignal.circular_buffer import CircularBuffer

ring = CircularBuffer(capacity=8)
ring.write([1, 2, 3, 4, 5])
frame = ring.get(4)    # [1, 2, 3, 4]; the read position is unchanged
ring.discard(2)        # advance by the hop size
len(ring)              # 3
```

Windowing a frame and scaling it up before an FFT:

```python
from microsignal.spectrum import apply_window, fft_auto_scale

windowed = apply_window(frame, window=[16384] * 4, shift=14)   # [1, 2, 3, 4]
scaled, shift_bits = fft_auto_scale(windowed)
# scaled == [4096, 8192, 12288, 16384], shift_bits == 12
```

After the FFT, `spectrum_to_energy` turns `(real, imag)` bins into power
values for a range of bins. `filterbank_accumulate_channels` sums them into
channels. It returns `num_channels + 1` values, and element 0 is scratch that
you should drop. `filterbank_sqrt` takes the square root of the channels.
`filterbank_spectral_subtraction` removes stationary noise. After that, you
can normalise the result with `apply_pcan_auto_gain_control_fixed` or
compress it with `filterbank_log`.

## State and errors

The functions do not change their arguments. Where a step carries state from
one frame to the next, the updated state comes back as part of the result,
and you pass it to the next call:

- `filterbank_spectral_subtraction` returns `(output, new_noise_estimate)`.
- `overlap_add_int16` and `overlap_add_float` return `(output, new_buffer)`.

`CircularBuffer` is the one object that keeps its own state.

Inputs outside their integer range raise `ValueError`. So do sizes that do
not match and requests the buffer cannot satisfy, such as writing to a full
buffer or discarding more than is stored. Reading past the available samples
with `peek`, `peek_direct` or `remove` raises `IndexError`. A frequency band
that runs past the spectrum in `filterbank_accumulate_channels` also raises
`IndexError`.

## What it does not do

The package has no FFT or inverse FFT. Compute the spectrum with the FFT
library of your choice and pass the 16-bit `(real, imag)` bins to
`spectrum_to_energy`. The package also has no command-line tool, and it does
not capture or play audio.