"""Shared fixtures: import path and deterministic token counts."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from toon_convert import tokenizer


@pytest.fixture(autouse=True)
def heuristic_tokens_only(monkeypatch):
    """Keep tiktoken (and its network downloads) out of the tests."""
    monkeypatch.setattr(tokenizer, "_encoders", {})
    monkeypatch.setattr(tokenizer, "_load_encoding", lambda model: None)


@pytest.fixture
def lines():
    """Collects everything a report or CLI writes through its out callable."""
    return []


@pytest.fixture
def int_digit_limit():
    """Pin the interpreter's int-to-str digit limit for the test."""
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("interpreter has no integer digit limit")
    old = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(old)
