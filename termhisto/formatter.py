from termhisto.histo import ConfigurationException, LayoutTooNarrowException
from termhisto.labels import fixed_format
from termhisto.util import log, pad_start, pad_end

DEFAULT_BAR_CHAR = '*'
BAR_MIN_WIDTH = 10
OUT_OF_RANGE_LABEL = 'out of range'

RANGE_SEPARATOR = ' ~ '
COUNT_SEPARATOR = '  '
BAR_SEPARATOR = ' |'
COLUMN_SEPARATOR = ' '


def _check_bar_char_and_width(bar_char, graph_width):
    if len(bar_char) == 0:
        raise ConfigurationException("bar char must not be empty")
    if graph_width <= 0:
        raise ConfigurationException(f"graph width must be positive, got {graph_width}")


class HistogramFormatter:
    """Renders one histogram as `low ~ high  count |****` lines.

    Bars are scaled so the largest bucket fills what is left of graph_width
    after the range and count columns.
    """
    def __init__(self, histogram, bar_char=DEFAULT_BAR_CHAR, graph_width=60, label_format=None):
        _check_bar_char_and_width(bar_char, graph_width)
        self.histogram = histogram
        self.bar_char = bar_char
        self.graph_width = graph_width
        self.label_format = fixed_format() if label_format is None else label_format
        self.include_out_of_range = False

    @property
    def show_out_of_range(self):
        return self.include_out_of_range or (
            self.histogram.tallies_out_of_range and self.histogram.out_of_range_count > 0)

    def range_strings(self):
        ticks = [self.label_format(tick) for tick in self.histogram.range_points]
        tick_width = max(len(t) for t in ticks)
        ranges = [f"{pad_start(tick_width, lo)}{RANGE_SEPARATOR}{pad_start(tick_width, hi)}"
                  for lo, hi in zip(ticks[:-1], ticks[1:])]
        if self.show_out_of_range:
            ranges.append(OUT_OF_RANGE_LABEL)
        range_width = max(len(r) for r in ranges)
        return [pad_start(range_width, r) for r in ranges]

    def count_strings(self):
        counts = [str(c) for c in self.histogram.counts]
        if self.show_out_of_range:
            counts.append(str(self.histogram.out_of_range_count))
        count_width = max(len(c) for c in counts)
        return [pad_start(count_width, c) for c in counts]

    def bar_strings(self, bar_max_width, pad=False, max_count=None):
        if bar_max_width <= BAR_MIN_WIDTH:
            raise LayoutTooNarrowException(
                f"bar max width becomes too small, retry with larger graph width, "
                f"bar_max_width={bar_max_width}, graph_width={self.graph_width}")
        if max_count is None:
            max_count = self.histogram.max_count()
        ratio = 0.0 if max_count == 0 else bar_max_width / (max_count * len(self.bar_char))

        bars = [self.bar_char * int(count * ratio) for count in self.histogram.counts]
        if self.show_out_of_range:
            bars.append('')
        if pad:
            bars = [pad_end(bar_max_width, bar) for bar in bars]
        return bars

    def line_strings(self, pad=False):
        ranges = self.range_strings()
        counts = self.count_strings()

        range_width = len(ranges[0])
        count_width = len(counts[0])
        bar_max_width = self.graph_width - (range_width + len(COUNT_SEPARATOR) + count_width + len(BAR_SEPARATOR))
        log.debug('Layout: range width %d, count width %d, bar width %d', range_width, count_width, bar_max_width)
        bars = self.bar_strings(bar_max_width, pad)

        return [f"{r}{COUNT_SEPARATOR}{c}{BAR_SEPARATOR}{b}" for r, c, b in zip(ranges, counts, bars)]

    def __str__(self):
        return '\n'.join(self.line_strings()) + '\n'


class MultipleHistogramFormatter:
    """Side by side columns for histograms sharing the same range points.

    All columns use one bar scale so bars compare across series.
    """
    def __init__(self, series, bar_char=DEFAULT_BAR_CHAR, graph_width=60, label_format=None):
        series = list(series)
        if len(series) == 0:
            raise ConfigurationException("at least one series is required")
        _check_bar_char_and_width(bar_char, graph_width)
        first = series[0]
        for s in series[1:]:
            if not first.histogram.same_range_points(s.histogram):
                raise ConfigurationException(f"range points of {s.label!r} differ from those of {first.label!r}")

        self.series = series
        self.graph_width = graph_width
        self.formatters = [HistogramFormatter(s.histogram, bar_char, graph_width, label_format) for s in series]

    def line_strings(self, pad=False):
        if len(self.formatters) == 1:
            return self.formatters[0].line_strings(pad)

        # rows line up only if every column has the out of range row or none does
        show_out_of_range = any(s.histogram.tallies_out_of_range and s.histogram.out_of_range_count > 0
                                for s in self.series)
        for f in self.formatters:
            f.include_out_of_range = show_out_of_range

        n = len(self.formatters)
        ranges = self.formatters[0].range_strings()
        count_columns = [f.count_strings() for f in self.formatters]
        range_width = len(ranges[0])
        count_widths = [len(counts[0]) for counts in count_columns]

        fixed_width = (range_width + len(COUNT_SEPARATOR)
                       + sum(w + len(BAR_SEPARATOR) for w in count_widths)
                       + (n - 1) * len(COLUMN_SEPARATOR))
        bar_max_width = (self.graph_width - fixed_width) // n
        log.debug('Layout: %d columns, range width %d, count widths %r, bar width %d',
                  n, range_width, count_widths, bar_max_width)

        max_count = max(s.histogram.max_count() for s in self.series)
        bar_columns = [f.bar_strings(bar_max_width, pad or k < n - 1, max_count=max_count)
                       for k, f in enumerate(self.formatters)]

        column_widths = [w + len(BAR_SEPARATOR) + bar_max_width for w in count_widths]
        header = pad_start(range_width, '') + COUNT_SEPARATOR + COLUMN_SEPARATOR.join(
            pad_end(width, s.label[:width]) for s, width in zip(self.series, column_widths))
        lines = [header if pad else header.rstrip()]
        for i, r in enumerate(ranges):
            fields = [f"{counts[i]}{BAR_SEPARATOR}{bars[i]}" for counts, bars in zip(count_columns, bar_columns)]
            lines.append(r + COUNT_SEPARATOR + COLUMN_SEPARATOR.join(fields))
        return lines

    def __str__(self):
        return '\n'.join(self.line_strings()) + '\n'
