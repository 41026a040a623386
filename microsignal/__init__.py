"""Fixed-point audio front-end primitives: integer math, ring buffer, windowing, filter banks, noise subtraction, PCAN gain control and overlap-add."""

__version__ = "0.1.0"