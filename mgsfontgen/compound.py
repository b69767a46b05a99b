# -*- coding: utf-8 -*-
"""
Compound character table.

Private use scalars in the charset stand for multi-character substitutes
(ligatures, digit pairs, ...). The table file has one entry per line:

    "E000"=ab
    "0xE001-0xE003"=xyz

A range maps every code point in [A, B] to the same substitute. Later
entries overwrite earlier ones.
"""

import unicodedata
from types import MappingProxyType

# General categories rendered at their natural width inside a compound
NO_PRESCALE_CATEGORIES = ('Lm', 'No', 'Zs')

EMPTY_TABLE = MappingProxyType({})


class CompoundTableError(ValueError):
    """Malformed compound character table entry."""


class UnresolvedCharacterError(LookupError):
    """A private use character has no compound table entry."""

    def __init__(self, code_point):
        self.code_point = code_point
        super().__init__(f"No compound character defined for U+{code_point:04X}.")


def is_private_use(char):
    return unicodedata.category(char) == 'Co'


def needs_prescale(substitute):
    """True when a compound substitute must be squeezed into one cell."""
    if not substitute:
        return False
    return unicodedata.category(substitute[0]) not in NO_PRESCALE_CATEGORIES


def _hex_to_int(text, lineno):
    cleaned = text.replace('0x', '').replace(' ', '')
    try:
        return int(cleaned, 16)
    except ValueError:
        raise CompoundTableError(f"Line {lineno}: invalid hex value '{text}'") from None


def parse_compound_table(lines):
    """
    Build the compound table from an iterable of lines.

    Args:
        lines: iterable of str, line endings optional

    Returns:
        read-only mapping of code point -> substitute string
    """
    table = {}
    for lineno, line in enumerate(lines, 1):
        line = line.rstrip('\r\n')
        if not line.strip():
            continue

        key, sep, value = line.partition('=')
        if not sep:
            raise CompoundTableError(f"Line {lineno}: missing '=' in '{line}'")
        if not value:
            raise CompoundTableError(f"Line {lineno}: empty substitute")

        key = key.strip()
        if len(key) < 3 or key[0] != '"' or key[-1] != '"':
            raise CompoundTableError(f"Line {lineno}: key must be quoted, got '{key}'")
        index = key[1:-1]
        parts = index.split('-')
        if len(parts) == 1:
            table[_hex_to_int(parts[0], lineno)] = value
        elif len(parts) == 2:
            start = _hex_to_int(parts[0], lineno)
            end = _hex_to_int(parts[1], lineno)
            if end < start:
                raise CompoundTableError(f"Line {lineno}: reversed range '{index}'")
            for code_point in range(start, end + 1):
                table[code_point] = value
        else:
            raise CompoundTableError(f"Line {lineno}: invalid range '{index}'")

    return MappingProxyType(table)


def read_compound_table(path):
    """Read a compound table file; no path means an empty table."""
    if path is None:
        return EMPTY_TABLE

    with open(path, 'r', encoding='utf-8-sig') as f:
        return parse_compound_table(f)


def resolve(char, table):
    """
    Resolve one charset scalar to the string that gets rendered.

    Raises:
        UnresolvedCharacterError: private use scalar missing from the table
    """
    if not is_private_use(char):
        return char

    code_point = ord(char)
    try:
        return table[code_point]
    except KeyError:
        raise UnresolvedCharacterError(code_point) from None
