"""
toon-convert: a compact line-oriented notation for JSON data in LLM prompts.

Toon drops the quotes, braces and repeated keys that JSON spends tokens on,
and projects arrays of uniform objects into a header plus comma-joined rows.
The decoder is best-effort: it reads flat records and table blocks back,
not nested structure.
"""

__version__ = "0.1.0"

from .errors import ToonError, StructureError, InvalidJSONError
from .value import UNDEFINED, from_json, to_json, kind_of
from .encoder import ToonEncoder, encode, render_scalar, common_keys
from .decoder import ToonDecoder, decode, parse_scalar
from .tokenizer import TokenCounter, estimate_tokens, MODEL_COSTS
from .samples import builtin_samples, load_samples
from .compare import compare_formats, ComparisonResult, FormatComparison
