import shutil

from termhisto.formatter import DEFAULT_BAR_CHAR
from termhisto.histo import ConfigurationException, OUT_OF_RANGE_POLICIES
from termhisto.labels import DEFAULT_PRECISION, fixed_format, significant_format
from termhisto.util import STDIN_SOURCE

DEFAULT_BUCKET_COUNT = 10
DEFAULT_AXIS_MIN = 0.0
DEFAULT_AXIS_MAX = 10.0
DEFAULT_GRAPH_WIDTH = 60
DEFAULT_OUT_OF_RANGE = 'tally'
AUTO = 'auto'


def parse_bound(s):
    """argparse type for --axis-min/--axis-max: a number or 'auto' (None)."""
    if s.strip().lower() == AUTO:
        return None
    return float(s)

def terminal_width():
    return shutil.get_terminal_size((DEFAULT_GRAPH_WIDTH, 20)).columns


class Options:
    def __init__(self, args):
        d = vars(args)
        self.sources = list(d.get('sources') or [STDIN_SOURCE])
        self.bucket_count = d.get('bucket_count', DEFAULT_BUCKET_COUNT)
        self.axis_min = d.get('axis_min', DEFAULT_AXIS_MIN)
        self.axis_max = d.get('axis_max', DEFAULT_AXIS_MAX)
        self.fixed_axis = d.get('fixed_axis', False)
        self.out_of_range = d.get('out_of_range', DEFAULT_OUT_OF_RANGE)
        self.graph_width = d.get('graph_width')
        if self.graph_width is None:
            self.graph_width = terminal_width()
        self.bar_char = d.get('bar_char', DEFAULT_BAR_CHAR)
        self.precision = d.get('precision', DEFAULT_PRECISION)

        lo, hi = d.get('min_significant_digits'), d.get('max_significant_digits')
        match (lo, hi):
            case (None, None):
                self.significant_digits = None
            case (None, _):
                self.significant_digits = (hi, hi)
            case (_, None):
                self.significant_digits = (lo, lo)
            case _:
                self.significant_digits = (lo, hi)
        self.validate()

    def validate(self):
        if self.bucket_count < 1:
            raise ConfigurationException(f"bucket count must be positive, got {self.bucket_count}")
        if self.graph_width <= 0:
            raise ConfigurationException(f"graph width must be positive, got {self.graph_width}")
        if len(self.bar_char) == 0:
            raise ConfigurationException("bar char must not be empty")
        if self.out_of_range not in OUT_OF_RANGE_POLICIES:
            raise ConfigurationException(f"unknown out of range policy: {self.out_of_range!r}")
        # builds the label callable once so bad digit settings fail here
        self.label_format

    @property
    def label_format(self):
        if self.significant_digits is None:
            return fixed_format(self.precision)
        return significant_format(*self.significant_digits)

    def __repr__(self):
        return f"Options({', '.join(f'{k}={v!r}' for k, v in vars(self).items())})"
