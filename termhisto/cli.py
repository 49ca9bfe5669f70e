import argparse
import sys

import numpy as np

from termhisto.axis import resolve_axis
from termhisto.formatter import HistogramFormatter, MultipleHistogramFormatter
from termhisto.histo import (Histogram, Series, build_range_points, OUT_OF_RANGE_POLICIES, MalformedInputException,
                             EmptySourceException, ConfigurationException, LayoutTooNarrowException)
from termhisto.options import (Options, parse_bound, DEFAULT_BUCKET_COUNT, DEFAULT_AXIS_MIN, DEFAULT_AXIS_MAX,
                               DEFAULT_OUT_OF_RANGE, DEFAULT_BAR_CHAR)
from termhisto.labels import DEFAULT_PRECISION
from termhisto.util import log, setup_logging, load_values, source_name, STDIN_SOURCE

FATAL_EXCEPTIONS = (MalformedInputException, EmptySourceException, ConfigurationException,
                    LayoutTooNarrowException, OSError)


def load_sources(sources, stdin=None):
    return [(source_name(pathname), load_values(pathname, stdin)) for pathname in sources]

def build_series(loaded, options):
    values = np.concatenate([v for _, v in loaded])
    lo, hi = resolve_axis(values, options.axis_min, options.axis_max, options.fixed_axis)
    range_points = build_range_points(options.bucket_count, lo, hi)
    series = []
    for name, v in loaded:
        histogram = Histogram(range_points, out_of_range=options.out_of_range)
        histogram.add_values(v)
        log.debug('%s: counts %r, out of range %d', name, histogram.counts, histogram.out_of_range_count)
        series.append(Series(name, histogram))
    return series

def render(series, options):
    if len(series) == 1:
        formatter = HistogramFormatter(series[0].histogram, options.bar_char, options.graph_width,
                                       options.label_format)
    else:
        formatter = MultipleHistogramFormatter(series, options.bar_char, options.graph_width,
                                               options.label_format)
    return str(formatter)

def run(options, stdin=None):
    """Read every source and return the rendered report."""
    loaded = load_sources(options.sources, stdin)
    return render(build_series(loaded, options), options)


def make_parser():
    parser = argparse.ArgumentParser(
        prog='termhisto',
        description="Print a text histogram of numbers read one per line from files or stdin.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument('sources', nargs='*', metavar='SOURCE',
                        help=f"input files, '{STDIN_SOURCE}' for stdin (default: stdin)")
    parser.add_argument('--bucket-count', type=int, default=DEFAULT_BUCKET_COUNT, help="histogram bucket count")
    parser.add_argument('--axis-min', type=parse_bound, default=DEFAULT_AXIS_MIN,
                        help="axis minimum value, or 'auto' to round down from the data")
    parser.add_argument('--axis-max', type=parse_bound, default=DEFAULT_AXIS_MAX,
                        help="axis maximum value, or 'auto' to round up from the data")
    parser.add_argument('--fixed-axis', action='store_true',
                        help="keep axis min and max even if some values are out of range")
    parser.add_argument('--out-of-range', choices=OUT_OF_RANGE_POLICIES, default=DEFAULT_OUT_OF_RANGE,
                        help="count out of range values in an extra row, or drop them")
    parser.add_argument('--graph-width', type=int, default=None,
                        help="graph width including labels (default: terminal width)")
    parser.add_argument('--bar-char', default=DEFAULT_BAR_CHAR, help="bar fill character")
    parser.add_argument('--precision', type=int, default=DEFAULT_PRECISION, help="decimal places of range labels")
    parser.add_argument('--min-significant-digits', type=int, default=None,
                        help="use scientific range labels with at least this many significant digits")
    parser.add_argument('--max-significant-digits', type=int, default=None,
                        help="use scientific range labels with at most this many significant digits")
    parser.add_argument('-v', '--verbose', action='store_true', help="debug logging")
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        options = Options(args)
        log.debug('%r', options)
        report = run(options)
    except FATAL_EXCEPTIONS as e:
        log.error('%s', e)
        return 1
    sys.stdout.write(report)
    return 0


if __name__ == '__main__':
    sys.exit(main())
