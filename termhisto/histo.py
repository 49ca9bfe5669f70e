from dataclasses import dataclass

import numpy as np


class MalformedInputException(Exception):
    pass
class EmptySourceException(Exception):
    pass
class ConfigurationException(Exception):
    pass
class LayoutTooNarrowException(Exception):
    pass

OUT_OF_RANGE_POLICIES = ('tally', 'drop')


def build_range_points(count, mn, mx):
    if count < 1:
        raise ConfigurationException(f"bucket count must be positive, got {count}")
    if not mx > mn:
        raise ConfigurationException(f"axis max must be greater than axis min, min={mn}, max={mx}")
    points = mn + (mx - mn) * np.arange(count + 1, dtype=np.float64) / count
    points[-1] = mx
    return points


class Histogram:
    def __init__(self, range_points, out_of_range='tally'):
        points = np.array(range_points, dtype=np.float64)
        if points.ndim != 1 or len(points) < 2:
            raise ConfigurationException("at least two range points are required")
        if not np.all(np.diff(points) > 0):
            raise ConfigurationException(f"range points must be strictly increasing: {points.tolist()}")
        if out_of_range not in OUT_OF_RANGE_POLICIES:
            raise ConfigurationException(f"unknown out of range policy: {out_of_range!r}")
        points.flags.writeable = False
        self._range_points = points
        self._counts = np.zeros(len(points) - 1, dtype=np.int64)
        self.out_of_range = out_of_range
        self.out_of_range_count = 0

    @classmethod
    def from_bounds(cls, count, mn, mx, out_of_range='tally'):
        return cls(build_range_points(count, mn, mx), out_of_range=out_of_range)

    @property
    def range_points(self):
        return self._range_points.copy()

    @property
    def counts(self):
        return self._counts.tolist()

    @property
    def bucket_count(self):
        return len(self._counts)

    @property
    def tallies_out_of_range(self):
        return self.out_of_range == 'tally'

    def add_value(self, v):
        i = int(np.searchsorted(self._range_points, v, side='right')) - 1
        if 0 <= i < len(self._counts):
            self._counts[i] += 1
            return
        match self.out_of_range:
            case 'tally':
                self.out_of_range_count += 1
            case 'drop':
                pass

    def add_values(self, values):
        values = np.asarray(values, dtype=np.float64).ravel()
        if values.size == 0:
            return
        idx = np.searchsorted(self._range_points, values, side='right') - 1
        in_range = (idx >= 0) & (idx < len(self._counts))
        self._counts += np.bincount(idx[in_range], minlength=len(self._counts))
        if self.tallies_out_of_range:
            self.out_of_range_count += int(np.count_nonzero(~in_range))

    def max_count(self):
        return int(self._counts.max())

    def total(self):
        return int(self._counts.sum())

    def same_range_points(self, other):
        return np.array_equal(self._range_points, other._range_points)

    def __eq__(self, other):
        if not isinstance(other, Histogram):
            return NotImplemented
        return self.same_range_points(other) and np.array_equal(self._counts, other._counts)

    __hash__ = None

    def __repr__(self):
        return f"Histogram(range_points={self._range_points.tolist()}, counts={self.counts})"


@dataclass
class Series:
    label: str
    histogram: Histogram
