"""
Value model shared by the encoder and decoder.

Values are plain Python objects mirroring the JSON data model:

    None            -> null
    bool            -> boolean
    int / float     -> number
    str             -> string
    list / tuple    -> array
    dict            -> object (str keys, insertion order is significant)

UNDEFINED is an extra scalar for an absent field. It is distinct from None,
renders as ``undefined`` and is what the decoder returns for that literal.

A value is always a tree: from_json builds a fresh one from source text and
nothing here shares or caches nodes.
"""

import json
from typing import Any, Dict, List, Union

from .errors import InvalidJSONError


class _Undefined:
    """Singleton marker for a missing field."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNDEFINED"

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()

Scalar = Union[None, bool, int, float, str, _Undefined]
Array = List[Any]
Object = Dict[str, Any]
Value = Union[Scalar, Array, Object]


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_scalar(value: Any) -> bool:
    return value is None or value is UNDEFINED or isinstance(value, (bool, int, float, str))


def kind_of(value: Any) -> str:
    """Name the value kind, or raise TypeError for non-JSON objects."""
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    raise TypeError(f"Object of type {type(value).__name__} is not a Toon value")


def from_json(text: str) -> Value:
    """Parse JSON source text into a fresh value tree.

    Raises:
        InvalidJSONError: the text is not valid JSON, or the parser refuses it
            (integers past the interpreter's digit limit, nesting past the
            recursion limit). The message carries the parser's own
            description and, for syntax errors, the position.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(
            f"{e.msg}: line {e.lineno} column {e.colno} (char {e.pos})",
            lineno=e.lineno,
            colno=e.colno,
        ) from e
    except (ValueError, RecursionError) as e:
        # valid syntax the parser still refuses: huge integers, very deep nesting
        raise InvalidJSONError(str(e) or type(e).__name__) from e


def _json_default(obj):
    if obj is UNDEFINED:
        return None
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_json(value: Value, pretty: bool = False) -> str:
    """Serialise a value as JSON text.

    Compact output has no whitespace at all; pretty output uses a two-space
    indent. UNDEFINED is written as null.
    """
    if pretty:
        return json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)
