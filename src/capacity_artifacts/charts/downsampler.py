# src/capacity_artifacts/charts/downsampler.py
"""
Downsampler: reduce a long capacity series to a fixed number of points.

Two policies:
- stable series   -> uniform stride over [0, n-1], raw values (no averaging)
- volatile series -> peak/valley sampling, so a zig-zag stays a zig-zag

Pure function: same input, same output. All index math is integer math.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from capacity_artifacts.exceptions import InsufficientDataError
from capacity_artifacts.models.capacity import Scale
from capacity_artifacts.models.render_config import DEFAULT_CONFIG, RenderConfig
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)

Extremum = Tuple[int, bool]     # (index, is_peak)


def downsample(
    series: Sequence[float],
    target_count: Optional[int] = None,
    *,
    scale: Scale = Scale.PERCENT,
    config: RenderConfig = DEFAULT_CONFIG,
) -> List[float]:
    """
    Downsample `series` to exactly `target_count` raw samples.

    - len(series) <= target_count -> series returned unchanged
    - empty series -> InsufficientDataError
    - first and last output always equal first and last input
    """
    k = target_count if target_count is not None else config.downsample.target_count
    if k < 2:
        raise ValueError(f"target_count must be at least 2, got {k}")

    values = np.asarray(series, dtype=float)
    if values.size == 0:
        raise InsufficientDataError(
            "Cannot downsample an empty series", available=0, required=1
        )
    if not np.all(np.isfinite(values)):
        raise ValueError("Series contains non-finite samples")

    if values.size <= k:
        return values.tolist()

    noise = config.downsample.noise_fraction * config.scale_spec(scale).span
    if is_volatile(values, noise, config):
        logger.debug("Volatile pattern detected (n=%d); using peak/valley sampling", values.size)
        return _sample_peaks_and_valleys(values, k)

    return _sample_uniform(values, k)


def is_volatile(values: np.ndarray, noise: float, config: RenderConfig = DEFAULT_CONFIG) -> bool:
    """
    Count direction changes of the first differences over the lookback window.
    Differences within +/- noise carry no direction.
    """
    settings = config.downsample
    if values.size < settings.min_volatile_length:
        return False

    diffs = np.diff(values[: settings.lookback])
    directions = np.where(diffs > noise, 1, np.where(diffs < -noise, -1, 0))
    moving = directions[directions != 0]
    if moving.size < 2:
        return False

    changes = int(np.count_nonzero(moving[1:] != moving[:-1]))
    return changes > settings.oscillation_cutoff


def uniform_indices(length: int, target_count: int) -> List[int]:
    """round_half_up(i * (length-1) / (target_count-1)) computed exactly."""
    span = length - 1
    steps = target_count - 1
    return [(2 * i * span + steps) // (2 * steps) for i in range(target_count)]


def _sample_uniform(values: np.ndarray, target_count: int) -> List[float]:
    return [float(values[i]) for i in uniform_indices(values.size, target_count)]


def find_extrema(values: np.ndarray) -> List[Extremum]:
    """Strict local maxima/minima (plateaus are not extrema)."""
    prev, curr, nxt = values[:-2], values[1:-1], values[2:]
    peaks = (curr > prev) & (curr > nxt)
    valleys = (curr < prev) & (curr < nxt)
    return [(int(i) + 1, bool(peaks[i])) for i in np.flatnonzero(peaks | valleys)]


def _pick_extremum(
    candidates: List[Extremum],
    want_peak: bool,
    values: np.ndarray,
) -> Optional[Extremum]:
    for kind in (want_peak, not want_peak):
        same = [c for c in candidates if c[1] == kind]
        if not same:
            continue
        # max/min return the earliest index on ties
        if kind:
            return max(same, key=lambda c: values[c[0]])
        return min(same, key=lambda c: values[c[0]])
    return None


def _sample_peaks_and_valleys(values: np.ndarray, target_count: int) -> List[float]:
    n = values.size
    middle = target_count - 2
    extrema = find_extrema(values)

    # Open against the early direction: a high start wants a valley next
    want_peak = not values[0] > values[min(5, n - 1)]

    picked: List[float] = [float(values[0])]
    interior = n - 2
    for seg in range(middle):
        lo = 1 + (seg * interior) // middle
        hi = 1 + ((seg + 1) * interior) // middle
        candidates = [e for e in extrema if lo <= e[0] < hi]

        chosen = _pick_extremum(candidates, want_peak, values)
        if chosen is None:
            idx = (lo + hi - 1) // 2
            picked.append(float(values[idx]))
            want_peak = not want_peak
            continue

        picked.append(float(values[chosen[0]]))
        want_peak = not chosen[1]

    picked.append(float(values[-1]))
    return picked
