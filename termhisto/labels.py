from termhisto.histo import ConfigurationException

DEFAULT_PRECISION = 2


def format_fixed(value, precision=DEFAULT_PRECISION):
    return f"{value:.{precision}f}"

def format_range_point(value, min_significant_digits, max_significant_digits):
    """Scientific notation with at most max_significant_digits digits.

    Trailing zeros of the mantissa are dropped until min_significant_digits remain,
    e.g. 0.5 with 1..3 digits is "5e-01" and 0.145 with 2..2 digits is "1.4e-01".
    """
    s = f"{value:.{max_significant_digits - 1}e}"
    mantissa, exp = s.split('e')
    if '.' in mantissa:
        whole, frac = mantissa.split('.')
        keep = max(min_significant_digits - 1, 0)
        while len(frac) > keep and frac.endswith('0'):
            frac = frac[:-1]
        mantissa = f"{whole}.{frac}" if frac else whole
    return f"{mantissa}e{exp}"


def fixed_format(precision=DEFAULT_PRECISION):
    if precision < 0:
        raise ConfigurationException(f"precision must not be negative, got {precision}")
    return lambda value: format_fixed(value, precision)

def significant_format(min_significant_digits, max_significant_digits):
    if not 1 <= min_significant_digits <= max_significant_digits:
        raise ConfigurationException(
            f"significant digits must satisfy 1 <= min <= max, got min={min_significant_digits}, max={max_significant_digits}")
    return lambda value: format_range_point(value, min_significant_digits, max_significant_digits)
