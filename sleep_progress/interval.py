import logging
import math
import re
from typing import Dict, Sequence, Tuple

from sleep_progress.exception import InvalidTimeInterval

logger = logging.getLogger(__name__)

MAX_INTERVAL_MS = 2**64 - 1

# Checked in this order, only one suffix is ever stripped.
UNIT_MULTIPLIERS: Dict[str, float] = {
    's': 1000.0,
    'm': 60.0 * 1000.0,
    'h': 60.0 * 60.0 * 1000.0,
    'd': 24.0 * 60.0 * 60.0 * 1000.0,
}
DEFAULT_MULTIPLIER = UNIT_MULTIPLIERS['s']

# float() also takes whitespace and `_` separators, which are not numbers here.
_NUMBER_RE = re.compile(
    r'[+-]?(?:inf|infinity|nan|(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?)',
    re.IGNORECASE | re.ASCII,
)


def split_unit(token: str) -> Tuple[str, float]:
    for suffix, multiplier in UNIT_MULTIPLIERS.items():
        if token.endswith(suffix):
            return token[: -len(suffix)], multiplier
    return token, DEFAULT_MULTIPLIER


def parse_number(value: str) -> float:
    if _NUMBER_RE.fullmatch(value) is None:
        raise ValueError(f'not a number: {value!r}')
    return float(value)


def parse_token(token: str) -> float:
    """Return the milliseconds represented by a single duration token."""
    value, multiplier = split_unit(token)
    try:
        number = parse_number(value)
    except ValueError:
        raise InvalidTimeInterval(token) from None
    return number * multiplier


def to_milliseconds(total: float) -> int:
    # Saturates the same way a float to u64 cast does.
    if math.isnan(total) or total <= 0:
        return 0
    if total >= MAX_INTERVAL_MS:
        return MAX_INTERVAL_MS
    return min(round(total), MAX_INTERVAL_MS)


def parse_interval(tokens: Sequence[str]) -> int:
    """Sum duration tokens such as `1.5`, `30s`, `2m`, `1h` or `1d`.

    Tokens without a suffix are seconds. Raises `InvalidTimeInterval` for
    the first token whose number cannot be parsed, without looking at the
    tokens after it.
    """
    total = 0.0
    for token in tokens:
        ms = parse_token(token)
        logger.debug('Parsed %r as %s ms', token, ms)
        total += ms
    interval = to_milliseconds(total)
    logger.debug('Total interval is %d ms', interval)
    return interval
