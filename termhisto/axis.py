"""Axis bounds: rounding observed extremes to readable endpoints."""

import math

from termhisto.histo import ConfigurationException
from termhisto.util import log, value_range

NICE_SECOND_DIGITS = (0, 2, 4, 5, 6, 8)


def _split(x):
    # x > 0, d1.d2 x 10^exp with round-to-nearest on d2
    mantissa, exp = f"{x:.1e}".split('e')
    d1, d2 = mantissa.split('.')
    return int(d1), int(d2), int(exp)

def _join(d1, d2, exp):
    return float(f"{d1}.{d2}e{exp}")

def _step_up(d1, d2, exp):
    d2 += 1
    if d2 == 10:
        d1, d2 = d1 + 1, 0
    if d1 == 10:
        d1, exp = 1, exp + 1
    return d1, d2, exp

def _step_down(d1, d2, exp):
    d2 -= 1
    if d2 < 0:
        d1, d2 = d1 - 1, 9
    if d1 == 0:
        d1, exp = 9, exp - 1
    return d1, d2, exp


def ceil_second_significant_digit(x):
    if x == 0 or not math.isfinite(x):
        return x
    if x < 0:
        return -floor_second_significant_digit(-x)
    d1, d2, exp = _split(x)
    if _join(d1, d2, exp) < x:
        d1, d2, exp = _step_up(d1, d2, exp)
    return _join(d1, d2, exp)

def floor_second_significant_digit(x):
    if x == 0 or not math.isfinite(x):
        return x
    if x < 0:
        return -ceil_second_significant_digit(-x)
    d1, d2, exp = _split(x)
    if _join(d1, d2, exp) > x:
        d1, d2, exp = _step_down(d1, d2, exp)
    return _join(d1, d2, exp)


def ceil_to_nice_bound(x):
    """Round x up so its second significant digit is one of 0, 2, 4, 5, 6, 8.

    0.21 -> 0.22, 0.29 -> 0.30, 9.9 -> 10. Negative values mirror floor_to_nice_bound.
    """
    if x == 0 or not math.isfinite(x):
        return x
    if x < 0:
        return -floor_to_nice_bound(-x)
    d1, d2, exp = _split(ceil_second_significant_digit(x))
    while d2 not in NICE_SECOND_DIGITS:
        d1, d2, exp = _step_up(d1, d2, exp)
    return _join(d1, d2, exp)

def floor_to_nice_bound(x):
    """Round x down so its second significant digit is one of 0, 2, 4, 5, 6, 8."""
    if x == 0 or not math.isfinite(x):
        return x
    if x < 0:
        return -ceil_to_nice_bound(-x)
    d1, d2, exp = _split(floor_second_significant_digit(x))
    while d2 not in NICE_SECOND_DIGITS:
        d1, d2, exp = _step_down(d1, d2, exp)
    return _join(d1, d2, exp)


def resolve_axis(values, axis_min=None, axis_max=None, fixed_axis=False):
    """Pick the (lo, hi) axis for values.

    A bound of None is detected from the data and rounded to a nice endpoint.
    Explicit bounds widen to cover the data unless fixed_axis is set.
    """
    data_min, data_max = value_range(values)
    if not (math.isfinite(data_min) and math.isfinite(data_max)):
        raise ConfigurationException(f"values must be finite, got min={data_min}, max={data_max}")
    if axis_min is None:
        lo = floor_to_nice_bound(data_min)
    elif fixed_axis:
        lo = axis_min
    else:
        lo = min(axis_min, data_min)
    if axis_max is None:
        hi = ceil_to_nice_bound(data_max)
    elif fixed_axis:
        hi = axis_max
    else:
        hi = max(axis_max, data_max)
    log.debug('Axis resolved to [%r, %r] (data [%r, %r])', lo, hi, data_min, data_max)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ConfigurationException(f"axis bounds must be finite, min={lo}, max={hi}")
    if not lo < hi:
        raise ConfigurationException(f"axis is empty, min={lo}, max={hi}; set --axis-min/--axis-max explicitly")
    return lo, hi
