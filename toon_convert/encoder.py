"""
Toon encoder: value tree -> compact line-oriented text.

Format rules:
    1. Scalars are written bare: null, undefined, true, false, numbers, and
       strings without quotes unless they contain one of  , : \\n { }
    2. Object fields are "key:value" lines; a nested object is introduced by a
       "key:" header and its fields are indented one unit deeper.
    3. Arrays start with a header carrying their length, "name[N]:".
    4. An array of objects sharing keys is projected to a table:
       "name[N]{k1,k2}:" followed by one comma-joined row per element.
       Keys not shared by every element are dropped.
    5. An empty array is just "name[0]".

Escapes are applied only inside quotes. A string with none of the trigger
characters is written bare even when it starts and ends with a double quote,
so the value '"hi"' is written as "hi" and reads back as hi.

The encoder refuses cyclic input and input nested deeper than max_depth with
a StructureError instead of exhausting the interpreter stack.
"""

import logging
import math
from typing import Any, List, Optional

from .errors import StructureError
from .value import UNDEFINED, is_array, is_object, to_json

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 2
DEFAULT_MAX_DEPTH = 200

# Any of these forces a string into quotes
QUOTE_TRIGGERS = (",", ":", "\n", "{", "}")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def needs_quotes(text: str) -> bool:
    return any(ch in text for ch in QUOTE_TRIGGERS)


def escape_string(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def render_number(value) -> str:
    """Canonical decimal text of a number.

    Integral floats drop the fractional part (25.0 -> 25) as JSON numbers
    do. NaN and infinities have no JSON form and render as null.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    return str(value)


def render_scalar(value: Any, escape: bool = True) -> str:
    """Render one scalar as it appears after "key:" or inside a table row.

    Nested arrays and objects that land in a table cell are written as
    compact inline JSON and then quoted like any other string.

    Args:
        value: Scalar (or container, when it sits in a table cell)
        escape: Escape backslash, double quote and line breaks inside quoted
                strings. With escape=False quoted strings are passed through
                untouched, which the decoder cannot always undo.
    """
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return render_number(value)
    if isinstance(value, str):
        if needs_quotes(value):
            body = escape_string(value) if escape else value
            return f'"{body}"'
        return value
    if is_array(value) or is_object(value):
        try:
            inline = to_json(value)
        except (ValueError, RecursionError) as e:
            raise StructureError(f"cannot inline table cell: {e}") from e
        return render_scalar(inline, escape)
    raise TypeError(f"Object of type {type(value).__name__} is not Toon serializable")


def common_keys(arr: List[dict]) -> List[str]:
    """First element's keys, in order, that every element also has."""
    if not arr:
        return []
    return [key for key in arr[0] if all(key in item for item in arr)]


class ToonEncoder:
    """Encode value trees to Toon text.

    Usage:
        enc = ToonEncoder(indent=2)
        enc.encode({"items": [{"id": 1, "name": "x"}, {"id": 2, "name": "y"}]})
        # items[2]{id,name}:
        #   1,x
        #   2,y
    """

    def __init__(self, indent: int = DEFAULT_INDENT, escape_strings: bool = True,
                 max_depth: Optional[int] = DEFAULT_MAX_DEPTH):
        if indent < 0:
            raise ValueError("indent must be >= 0")
        self.indent = indent
        self.escape_strings = escape_strings
        self.max_depth = max_depth
        self._pad = " " * indent

    def encode(self, value: Any, name: str = "") -> str:
        """Encode a value.

        Args:
            value: Value tree (see toon_convert.value)
            name: Structural key for the root; "" at the top level

        Returns:
            Toon text, lines joined with "\\n" and no trailing newline.

        Raises:
            StructureError: cyclic input, or nesting deeper than max_depth
            TypeError: a node is not a JSON-compatible Python object
        """
        return "\n".join(self._lines(value, name, 0, set()))

    def render_scalar(self, value: Any) -> str:
        return render_scalar(value, self.escape_strings)

    # ── Internals ───────────────────────────────────────────────────────────

    def _lines(self, value, name, depth, path) -> List[str]:
        if is_array(value):
            return self._guarded(self._array_lines, value, name, depth, path)
        if is_object(value):
            return self._guarded(self._object_lines, value, name, depth, path)
        return [self.render_scalar(value)]

    def _guarded(self, build, container, name, depth, path) -> List[str]:
        # path holds the ids of the containers currently being encoded
        if self.max_depth is not None and depth >= self.max_depth:
            raise StructureError(f"structure too deep: more than {self.max_depth} nested levels")
        marker = id(container)
        if marker in path:
            raise StructureError(f"cyclic structure at {name or '<root>'!r}")
        path.add(marker)
        try:
            return build(container, name, depth, path)
        finally:
            path.discard(marker)

    def _indented(self, lines: List[str]) -> List[str]:
        return [self._pad + line for line in lines]

    def _object_lines(self, obj: dict, name: str, depth: int, path: set) -> List[str]:
        body = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"keys must be str, not {type(key).__name__}")
            if is_array(value) or is_object(value):
                body.extend(self._lines(value, key, depth + 1, path))
            else:
                body.append(f"{key}:{self.render_scalar(value)}")

        if not name:
            return body
        return [f"{name}:"] + self._indented(body)

    def _array_lines(self, arr, name: str, depth: int, path: set) -> List[str]:
        if not arr:
            logger.debug("array %r: empty", name)
            return [f"{name}[0]"]

        if all(is_object(item) for item in arr):
            keys = common_keys(arr)
            if keys:
                dropped = {k for item in arr for k in item} - set(keys)
                if dropped:
                    logger.debug("array %r: dropping non-shared keys %s", name, sorted(dropped))
                logger.debug("array %r: %d rows, columns %s", name, len(arr), keys)
                rows = []
                for item in arr:
                    rows.append(",".join(self.render_scalar(item[key]) for key in keys))
                header = f"{name}[{len(arr)}]{{{','.join(keys)}}}:"
                return [header] + self._indented(rows)

        logger.debug("array %r: %d generic items", name, len(arr))
        lines = [f"{name}[{len(arr)}]:"]
        for item in arr:
            lines.extend(self._indented(self._lines(item, "", depth + 1, path)))
        return lines


def encode(value: Any, name: str = "", indent: int = DEFAULT_INDENT,
           escape_strings: bool = True, max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> str:
    """Encode a value to Toon text with a one-off ToonEncoder."""
    return ToonEncoder(indent=indent, escape_strings=escape_strings, max_depth=max_depth).encode(value, name)
