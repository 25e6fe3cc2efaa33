"""Decimated magnitude spectrum estimation.

The estimator evaluates the discrete Fourier sum directly, but only at every
``bin_stride``-th frequency bin and over every ``time_stride``-th sample. Each
computed magnitude is then copied into the bins it stands for. This is a
coarse approximation traded for speed, not a real transform, and its output
must stay bin-for-bin stable: onset thresholds are tuned against it.
"""

from __future__ import annotations

import numpy as np


class SpectralEstimator:
    """Approximate magnitude spectrum of a windowed frame.

    Parameters
    ----------
    frame_size:
        Frame length F. The spectrum has F/2 bins.
    bin_stride:
        Distance between evaluated frequency bins.
    time_stride:
        Distance between time samples used in the sum.
    """

    def __init__(self, frame_size: int = 2048, bin_stride: int = 8, time_stride: int = 8) -> None:
        self.frame_size = frame_size
        self.n_bins = frame_size // 2
        self.bin_stride = bin_stride
        self.time_stride = time_stride

        self._coarse_bins = np.arange(0, self.n_bins, bin_stride)
        t = np.arange(0, frame_size, time_stride)
        self._norm = 1.0 / len(t)

        angle = -2.0 * np.pi * np.outer(self._coarse_bins, t) / frame_size
        self._cos = np.cos(angle)
        self._sin = np.sin(angle)

        # The last evaluated bin is only replicated if a full stride fits after it.
        last = int(self._coarse_bins[-1])
        self._zero_from = last + 1 if last + bin_stride >= self.n_bins else self.n_bins

    def estimate(self, samples: np.ndarray) -> np.ndarray:
        """Return the F/2-bin magnitude spectrum of one windowed frame."""
        samples = np.asarray(samples, dtype=np.float64)
        if samples.shape != (self.frame_size,):
            raise ValueError(
                f"expected a frame of {self.frame_size} samples, got shape {samples.shape}"
            )

        decimated = samples[::self.time_stride]
        real = self._cos @ decimated
        imag = self._sin @ decimated
        magnitudes = np.sqrt(real * real + imag * imag) * self._norm

        spectrum = np.repeat(magnitudes, self.bin_stride)[:self.n_bins]
        spectrum[self._zero_from:] = 0.0
        return spectrum
