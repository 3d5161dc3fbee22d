"""
Token counting and cost estimation for JSON / Toon comparisons.

Priority:
1. tiktoken encoding for the requested model: exact counts
2. cl100k_base when tiktoken does not know the model (e.g. claude-3-*)
3. Heuristic fallback: BPE-aware estimation when tiktoken or its
   encoding files are unavailable (offline, not installed)

Encodings are lazy-loaded on first use and cached per model.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_MODEL = os.environ.get("TOON_CONVERT_MODEL", "gpt-4")
FALLBACK_ENCODING = "cl100k_base"

# ── Price table (USD per 1K tokens, as of 2024) ─────────────────────────────
MODEL_COSTS = {
    "gpt-4": {"input": 0.03, "output": 0.06},
    "gpt-4-turbo": {"input": 0.01, "output": 0.03},
    "gpt-3.5-turbo": {"input": 0.0005, "output": 0.0015},
    "claude-3-opus": {"input": 0.015, "output": 0.075},
    "claude-3-sonnet": {"input": 0.003, "output": 0.015},
}

_HEURISTIC_RE = re.compile(
    r'[\U00010000-\U0010ffff][\ufe00-\ufe0f\u200d]*'
    r'|[\u2600-\u27bf\u2b50-\u2bff][\ufe00-\ufe0f\u200d]*'
    r'|[a-zA-Z_][a-zA-Z0-9_]*'
    r'|\d+'
    r'|[^\s\w]'
    r'|\s+'
)

_encoders: Dict[str, object] = {}


def _load_encoding(model: str):
    """Lazy-load the tiktoken encoding for a model. Returns encoding or None."""
    if model in _encoders:
        return _encoders[model]
    enc = None
    try:
        import tiktoken

        try:
            enc = tiktoken.encoding_for_model(model)
        except KeyError:
            enc = tiktoken.get_encoding(FALLBACK_ENCODING)
    except Exception as e:
        logger.debug("tiktoken unavailable for %s, using heuristic: %s", model, e)
        enc = None
    _encoders[model] = enc
    return enc


def _chunk_cost(chunk: str) -> int:
    first_char = chunk[0]
    code_point = ord(first_char)

    if code_point in range(0xFE00, 0xFE10) or code_point == 0x200D:
        return 0
    if code_point > 0x1F00 or code_point in range(0x2600, 0x27C0):
        return 3  # emoji, 2-4 tokens
    if first_char.isalpha() or first_char == '_':
        word_len = len(chunk)
        if word_len <= 7:
            return 1
        if word_len <= 12:
            return 2
        return max(2, word_len // 5)
    if first_char.isdigit():
        return max(1, len(chunk) // 3)
    if first_char.isspace():
        newlines = chunk.count('\n')
        return newlines + (1 if newlines == 0 and len(chunk) > 1 else 0)
    return 1


def heuristic_tokens(text: str) -> List[str]:
    """Split text the way the heuristic counts it."""
    return [c for c in _HEURISTIC_RE.findall(text) if c]


def heuristic_count(text: str) -> int:
    """BPE-style estimate, roughly 6-10% off a real tokenizer."""
    if not text:
        return 0
    return max(1, sum(_chunk_cost(chunk) for chunk in heuristic_tokens(text)))


@dataclass
class TokenAnalysis:
    """Token breakdown of one text."""
    count: int
    tokens: list
    average_token_length: float
    text_length: int


@dataclass
class CostEstimate:
    """Input/output cost of a token volume for one model, in USD."""
    model: str
    tokens: int
    input_cost: float
    output_cost: float

    @property
    def total_cost(self) -> float:
        return self.input_cost + self.output_cost

    @staticmethod
    def format(amount: float) -> str:
        return f"${amount:.6f}"

    def as_dict(self) -> dict:
        return {
            "model": self.model,
            "tokens": self.tokens,
            "inputCost": self.format(self.input_cost),
            "outputCost": self.format(self.output_cost),
            "totalCost": self.format(self.total_cost),
        }


class TokenCounter:
    """Counts tokens for one model and prices them.

    Usage:
        counter = TokenCounter("gpt-4")
        counter.count_tokens("items[2]{id,name}:")
        counter.estimate_cost(1200).as_dict()
    """

    def __init__(self, model: str = DEFAULT_MODEL):
        self.model = model
        self._encoding = _load_encoding(model)

    @property
    def exact(self) -> bool:
        """True when counts come from tiktoken rather than the heuristic."""
        return self._encoding is not None

    def count_tokens(self, text: str) -> int:
        if not text:
            return 0
        if self._encoding is not None:
            return len(self._encoding.encode(text, disallowed_special=()))
        return heuristic_count(text)

    def analyze_tokens(self, text: str) -> TokenAnalysis:
        if self._encoding is not None:
            ids = self._encoding.encode(text, disallowed_special=())
            tokens = [self._encoding.decode([t]) for t in ids]
            count = len(ids)
        else:
            tokens = heuristic_tokens(text)
            count = heuristic_count(text)
        return TokenAnalysis(
            count=count,
            tokens=tokens,
            average_token_length=len(text) / count if count else 0.0,
            text_length=len(text),
        )

    def compare_tokens(self, text1: str, text2: str, label1: str = "Text 1", label2: str = "Text 2") -> dict:
        """Compare two texts; savings are relative to text1."""
        tokens1 = self.count_tokens(text1)
        tokens2 = self.count_tokens(text2)
        saved = tokens1 - tokens2
        pct = (saved / tokens1 * 100) if tokens1 else 0.0
        return {
            label1: {"tokens": tokens1, "characters": len(text1)},
            label2: {"tokens": tokens2, "characters": len(text2)},
            "savings": {
                "tokens": saved,
                "percentage": f"{pct:.2f}%",
                "characterSavings": len(text1) - len(text2),
            },
        }

    def estimate_cost(self, tokens: int, model: Optional[str] = None) -> CostEstimate:
        """Price a token count; unknown models use the gpt-4 row."""
        model = model or self.model
        rates = MODEL_COSTS.get(model, MODEL_COSTS["gpt-4"])
        return CostEstimate(
            model=model,
            tokens=tokens,
            input_cost=tokens / 1000 * rates["input"],
            output_cost=tokens / 1000 * rates["output"],
        )


def estimate_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """Count tokens with the cached encoding for model."""
    return TokenCounter(model).count_tokens(text)
