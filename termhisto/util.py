import logging
import math
import sys

import numpy as np
from colorlog import ColoredFormatter

from termhisto.histo import MalformedInputException, EmptySourceException

STDIN_SOURCE = '-'

log = logging.getLogger('termhisto')
log.setLevel(logging.INFO)
log.propagate = False


def setup_logging(verbose=False, stream=None):
    ch = logging.StreamHandler(sys.stderr if stream is None else stream)
    ch.setFormatter(ColoredFormatter(
        "%(log_color)s%(name)s: %(message)s",
        reset=True,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'white,bold',
            'WARNING': 'yellow',
            'ERROR': 'red,bold',
            'CRITICAL': 'red,bg_white',
        },
        style='%',
    ))
    log.handlers = []  # No duplicated handlers
    log.addHandler(ch)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    return log


def source_name(pathname):
    return 'stdin' if pathname == STDIN_SOURCE else pathname

def parse_values(lines, name):
    values = []
    try:
        for lineno, line in enumerate(lines, 1):
            try:
                value = float(line)
            except ValueError:
                raise MalformedInputException(f"{name}:{lineno}: not a number: {line.rstrip()!r}") from None
            if not math.isfinite(value):
                raise MalformedInputException(f"{name}:{lineno}: not a finite number: {line.strip()!r}")
            values.append(value)
    except UnicodeDecodeError:
        raise MalformedInputException(f"{name}: not valid UTF-8 text") from None
    if len(values) == 0:
        raise EmptySourceException(f"no value from {name}")
    return np.array(values, dtype=np.float64)

def load_values(pathname:str, stdin=None):
    name = source_name(pathname)
    if pathname == STDIN_SOURCE:
        values = parse_values(sys.stdin if stdin is None else stdin, name)
    else:
        with open(pathname, 'r', encoding='utf-8') as f:
            values = parse_values(f, name)
    log.debug('Read %d values from %s', len(values), name)
    return values


def value_range(values):
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise EmptySourceException("no value")
    return float(arr.min()), float(arr.max())

def pad_start(width, s):
    return f"{s:>{width}}"

def pad_end(width, s):
    return f"{s:<{width}}"
