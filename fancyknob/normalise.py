"""Conversions between a knob's value range and the normalised range [0, 1].

Values are always clamped into the range. Logarithmic knobs may include
zero and infinity in their range.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# When an infinitely large logarithmic range is requested (e.g. from zero),
# the scale spans this many orders of magnitude.
INF_RANGE_MAGNITUDE = 10.0


@dataclass
class KnobSpec:
    """Parameters controlling how a knob maps values to positions."""

    logarithmic: bool = False
    # Smallest positive value of interest before a logarithmic knob snaps to 0.
    smallest_finite: float = 1e-6
    # Largest positive value of interest before a logarithmic knob snaps to infinity.
    largest_finite: float = 1e6


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between ``start`` and ``end``."""
    return (1.0 - t) * start + t * end


def remap(
    x: float, from_start: float, from_end: float, to_start: float, to_end: float
) -> float:
    """Map ``x`` from one range onto another, without clamping."""
    t = (x - from_start) / (from_end - from_start)
    return lerp(to_start, to_end, t)


def remap_clamp(
    x: float, from_start: float, from_end: float, to_start: float, to_end: float
) -> float:
    """Map ``x`` from one range onto another, clamping to the target range."""
    if from_end < from_start:
        return remap_clamp(x, from_end, from_start, to_end, to_start)
    if x <= from_start:
        return to_start
    if from_end <= x:
        return to_end
    t = (x - from_start) / (from_end - from_start)
    if t >= 1.0:
        return to_end
    return lerp(to_start, to_end, t)


def _log10(x: float) -> float:
    if x == 0.0:
        return -math.inf
    if x < 0.0 or math.isnan(x):
        return math.nan
    return math.log10(x)


def _require_finite(lo: float, hi: float) -> None:
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ValueError("Use a logarithmic range.")


def _range_log10(lo: float, hi: float, spec: KnobSpec) -> tuple[float, float]:
    if lo == 0.0 and hi == math.inf:
        return _log10(spec.smallest_finite), _log10(spec.largest_finite)
    if lo == 0.0:
        if spec.smallest_finite < hi:
            return _log10(spec.smallest_finite), _log10(hi)
        return _log10(hi) - INF_RANGE_MAGNITUDE, _log10(hi)
    if hi == math.inf:
        if lo < spec.largest_finite:
            return _log10(lo), _log10(spec.largest_finite)
        return _log10(lo), _log10(lo) + INF_RANGE_MAGNITUDE
    return _log10(lo), _log10(hi)


def _logarithmic_zero_cutoff(lo: float, hi: float) -> float:
    min_magnitude = INF_RANGE_MAGNITUDE if lo == -math.inf else abs(_log10(abs(lo)))
    max_magnitude = INF_RANGE_MAGNITUDE if hi == math.inf else abs(_log10(hi))
    total = min_magnitude + max_magnitude
    cutoff = min_magnitude / total if total != 0.0 else math.nan
    if not 0.0 <= cutoff <= 1.0:
        raise ValueError(f"Bad cutoff {cutoff!r} for min {lo!r} and max {hi!r}")
    return cutoff


def value_from_normalised(
    normalised: float, range_min: float, range_max: float, spec: KnobSpec
) -> float:
    """Return the value at position ``normalised`` (0..1) of the range."""
    lo, hi = range_min, range_max
    if math.isnan(lo) or math.isnan(hi):
        return math.nan
    if lo == hi:
        return lo
    if lo > hi:
        return value_from_normalised(1.0 - normalised, hi, lo, spec)
    if normalised <= 0.0:
        return lo
    if normalised >= 1.0:
        return hi
    if spec.logarithmic:
        if hi <= 0.0:
            return -value_from_normalised(normalised, -lo, -hi, spec)
        if lo >= 0.0:
            min_log, max_log = _range_log10(lo, hi, spec)
            return 10.0 ** lerp(min_log, max_log, normalised)
        cutoff = _logarithmic_zero_cutoff(lo, hi)
        if normalised < cutoff:
            return value_from_normalised(
                remap(normalised, 0.0, cutoff, 0.0, 1.0), lo, 0.0, spec
            )
        return value_from_normalised(
            remap(normalised, cutoff, 1.0, 0.0, 1.0), 0.0, hi, spec
        )
    _require_finite(lo, hi)
    return lerp(lo, hi, min(max(normalised, 0.0), 1.0))


def normalised_from_value(
    value: float, range_min: float, range_max: float, spec: KnobSpec
) -> float:
    """Return the position (0..1) of ``value`` within the range."""
    lo, hi = range_min, range_max
    if math.isnan(lo) or math.isnan(hi):
        return math.nan
    if lo == hi:
        return 0.5
    if lo > hi:
        return 1.0 - normalised_from_value(value, hi, lo, spec)
    if value <= lo:
        return 0.0
    if value >= hi:
        return 1.0
    if spec.logarithmic:
        if hi <= 0.0:
            return normalised_from_value(-value, -lo, -hi, spec)
        if lo >= 0.0:
            min_log, max_log = _range_log10(lo, hi, spec)
            return remap(_log10(value), min_log, max_log, 0.0, 1.0)
        cutoff = _logarithmic_zero_cutoff(lo, hi)
        if value < 0.0:
            return remap(
                normalised_from_value(value, lo, 0.0, spec), 0.0, 1.0, 0.0, cutoff
            )
        return remap(
            normalised_from_value(value, 0.0, hi, spec), 0.0, 1.0, cutoff, 1.0
        )
    _require_finite(lo, hi)
    return remap_clamp(value, lo, hi, 0.0, 1.0)