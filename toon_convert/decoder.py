"""
Best-effort Toon decoder.

Reads text line by line and recognises three line shapes:

    name[N]{k1,k2}:   table header, followed by N comma-separated rows
    name[N]:          list header, followed by N scalar lines
    key:value         a single scalar field
    anything else     a bare scalar

Scope: flat records and uniform array blocks only. Indentation is ignored,
so nested objects and generic arrays written by the encoder do not come back
as nested structure. Row fields are split on every comma, including commas
inside quoted strings. A bare value that starts and ends with a double
quote loses that pair of quotes, even when the encoder wrote it unquoted.
Malformed input never raises; short blocks and mismatched rows decode to
whatever is present.
"""

import logging
import re
from typing import Any, List, Tuple

from .value import UNDEFINED

logger = logging.getLogger(__name__)

_ARRAY_HEADER_RE = re.compile(r"^(\w*)\[(\d+)\](?:\{([^}]+)\})?:")
_KEY_VALUE_RE = re.compile(r"^(\w+):(.*)$")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")

_LITERALS = {
    "null": None,
    "undefined": UNDEFINED,
    "true": True,
    "false": False,
}

_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def unescape_string(text: str) -> str:
    """Reverse the encoder's backslash escapes. Unknown escapes are kept as-is."""
    if "\\" not in text:
        return text
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text) and text[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[text[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def parse_scalar(text: str, unescape: bool = True) -> Any:
    """Parse one scalar field.

    Order: literals (null, undefined, true, false), a double-quoted string
    (one layer of quotes removed), a number, and finally the trimmed text.
    """
    text = text.strip()
    if text in _LITERALS:
        return _LITERALS[text]
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        body = text[1:-1]
        return unescape_string(body) if unescape else body
    if _NUMBER_RE.match(text):
        return int(text) if _INT_RE.match(text) else float(text)
    return text


class ToonDecoder:
    """Line-shape decoder for Toon text.

    Usage:
        dec = ToonDecoder()
        dec.decode("items[2]{id,name}:\\n  1,x\\n  2,y")
        # [{'id': 1, 'name': 'x'}, {'id': 2, 'name': 'y'}]
    """

    def __init__(self, unescape: bool = True):
        self.unescape = unescape

    def decode(self, text: str) -> Any:
        """Decode the first construct in text; returns None for blank input."""
        lines = self._content_lines(text)
        if not lines:
            return None
        value, _ = self.parse_lines(lines, 0)
        return value

    def decode_all(self, text: str) -> List[Any]:
        """Decode every top-level construct in order."""
        lines = self._content_lines(text)
        values = []
        idx = 0
        while idx < len(lines):
            value, idx = self.parse_lines(lines, idx)
            values.append(value)
        return values

    def parse_lines(self, lines: List[str], start: int) -> Tuple[Any, int]:
        """Parse the construct starting at lines[start].

        Returns:
            (value, index of the first line after the construct)
        """
        line = lines[start].strip()

        header = _ARRAY_HEADER_RE.match(line)
        if header:
            name, count, keys_str = header.groups()
            count = int(count)
            rows = lines[start + 1:start + 1 + count]
            if len(rows) < count:
                logger.debug("array %r: expected %d rows, found %d", name, count, len(rows))
            if keys_str:
                keys = [k.strip() for k in keys_str.split(",")]
                items = [self._row_object(keys, row) for row in rows]
            else:
                items = [self.parse_scalar(row) for row in rows]
            return items, start + 1 + len(rows)

        kv = _KEY_VALUE_RE.match(line)
        if kv:
            return self.parse_scalar(kv.group(2)), start + 1

        return self.parse_scalar(line), start + 1

    def parse_scalar(self, text: str) -> Any:
        return parse_scalar(text, self.unescape)

    def _row_object(self, keys: List[str], row: str) -> dict:
        fields = row.strip().split(",")
        item = {}
        for idx, key in enumerate(keys):
            item[key] = self.parse_scalar(fields[idx]) if idx < len(fields) else UNDEFINED
        return item

    @staticmethod
    def _content_lines(text: str) -> List[str]:
        return [line for line in text.split("\n") if line.strip()]


def decode(text: str, unescape: bool = True) -> Any:
    """Decode the first construct of Toon text with a one-off ToonDecoder."""
    return ToonDecoder(unescape=unescape).decode(text)
