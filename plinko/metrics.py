import numpy as np
from typing import Sequence


def bin_histogram(bins, n_bins):
    """Counts per bin; entries outside [0, n_bins) (misses) are ignored."""
    bins = np.asarray(bins, dtype=int)
    valid = bins[(bins >= 0) & (bins < n_bins)]
    return np.bincount(valid, minlength=n_bins)


def bin_frequencies(counts):
    counts = np.asarray(counts, dtype=float)
    total = counts.sum()
    if total == 0:
        return np.zeros_like(counts)
    return counts / total


def expected_label_value(counts, labels: Sequence[str]) -> float:
    """Mean payout per landed ball, reading the bin labels as numbers."""
    values = np.array([float(label) for label in labels])
    return float((bin_frequencies(counts) * values).sum())


def center_bias(counts) -> float:
    """Mean absolute distance from the middle bin, in bins. 0 means everything lands dead centre."""
    freqs = bin_frequencies(counts)
    centre = (len(freqs) - 1) / 2
    offsets = np.abs(np.arange(len(freqs)) - centre)
    return float((freqs * offsets).sum())
