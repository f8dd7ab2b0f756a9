import re
import logging
from dataclasses import dataclass

from readmedoc.core.errors import MalformedMarkerError

logger = logging.getLogger(__name__)

EQN_START = re.compile(r'<!-- <equation.*> -->')
EQN_END = '<!-- </equation> -->'

# Extraction order matters: errors are reported for the first failing attribute.
ATTRIBUTES = ('label', 'alt', 'raw')
REQUIRED_NON_EMPTY = ('label', 'raw')


@dataclass(frozen=True)
class EquationAttributes:
    label: str
    alt: str
    raw: str


def is_start_marker(value):
    """Return True if `value` is an equation start comment."""
    return isinstance(value, str) and EQN_START.search(value) is not None


def is_end_marker(value):
    """Return True if `value` is exactly an equation end comment."""
    return isinstance(value, str) and value.strip() == EQN_END


def scan_attribute(text, name):
    """
    Scans `text` for the first `name="..."` attribute.

    The grammar is deliberately small: the literal `name="`, then any run of
    characters other than `"`, then a closing `"`. There is no escaping.

    Returns:
        str: the attribute value.

    Raises:
        MalformedMarkerError: if the attribute is absent or its value is unterminated.
    """
    opener = f'{name}="'
    start = text.find(opener)
    if start == -1:
        raise MalformedMarkerError(name, text, 'missing')

    cursor = start + len(opener)
    n = len(text)
    value_start = cursor
    while cursor < n and text[cursor] != '"':
        cursor += 1

    if cursor >= n:
        raise MalformedMarkerError(name, text, 'unterminated')
    return text[value_start:cursor]


def parse_attributes(text, log=None):
    """
    Extracts the label, alternate text and raw expression from an equation
    start comment.
    """
    log = log or logger
    values = {}
    for name in ATTRIBUTES:
        try:
            value = scan_attribute(text, name)
        except MalformedMarkerError:
            log.debug(f"Invalid node: {text}")
            raise
        if not value and name in REQUIRED_NON_EMPTY:
            log.debug(f"Invalid node: {text}")
            raise MalformedMarkerError(name, text, 'empty')
        values[name] = value

    log.debug(f"Label: {values['label']}")
    log.debug(f"Alternate text: {values['alt']}")
    log.debug(f"Raw equation: {values['raw']}")
    return EquationAttributes(**values)
