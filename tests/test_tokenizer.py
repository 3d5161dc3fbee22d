"""Token counter tests. tiktoken is stubbed out; see conftest."""

import sys
import types

import pytest

from toon_convert import MODEL_COSTS, TokenCounter, estimate_tokens
from toon_convert import tokenizer
from toon_convert.tokenizer import _load_encoding, heuristic_count, heuristic_tokens


def test_heuristic_count():
    assert heuristic_count("") == 0
    assert heuristic_count("hello world") == 2
    assert heuristic_count("12345678") == 2
    assert heuristic_count("configuration") == 2
    assert heuristic_count("a\nb") == 3


def test_heuristic_tokens_cover_text():
    text = "items[2]{id,name}:\n  1,x"
    assert "".join(heuristic_tokens(text)) == text


def test_count_tokens():
    counter = TokenCounter("gpt-4")
    assert not counter.exact
    assert counter.count_tokens("") == 0
    assert counter.count_tokens("hello") >= 1
    assert counter.count_tokens("hello world this is a test") >= 4
    assert estimate_tokens("hello world") == counter.count_tokens("hello world")


def test_analyze_tokens():
    counter = TokenCounter()
    analysis = counter.analyze_tokens("users[2]{id,name}:")
    assert analysis.count == counter.count_tokens("users[2]{id,name}:")
    assert analysis.text_length == len("users[2]{id,name}:")
    assert analysis.average_token_length == pytest.approx(analysis.text_length / analysis.count)
    assert analysis.tokens


def test_analyze_empty_text():
    analysis = TokenCounter().analyze_tokens("")
    assert analysis.count == 0
    assert analysis.average_token_length == 0.0


def test_compare_tokens():
    counter = TokenCounter()
    json_text = '{"users":[{"id":1,"name":"Alice"},{"id":2,"name":"Bob"}]}'
    toon_text = "users[2]{id,name}:\n  1,Alice\n  2,Bob"
    report = counter.compare_tokens(json_text, toon_text, "JSON", "Toon")
    assert report["JSON"]["characters"] == len(json_text)
    assert report["Toon"]["characters"] == len(toon_text)
    assert report["savings"]["tokens"] == report["JSON"]["tokens"] - report["Toon"]["tokens"]
    assert report["savings"]["percentage"].endswith("%")
    assert report["savings"]["characterSavings"] > 0


def test_estimate_cost():
    cost = TokenCounter("gpt-4").estimate_cost(1000)
    assert cost.model == "gpt-4"
    assert cost.input_cost == pytest.approx(0.03)
    assert cost.output_cost == pytest.approx(0.06)
    assert cost.total_cost == pytest.approx(0.09)
    assert cost.as_dict()["inputCost"] == "$0.030000"
    assert cost.as_dict()["totalCost"] == "$0.090000"


def test_estimate_cost_other_model():
    cost = TokenCounter("gpt-4").estimate_cost(2000, model="claude-3-sonnet")
    assert cost.model == "claude-3-sonnet"
    assert cost.input_cost == pytest.approx(2 * MODEL_COSTS["claude-3-sonnet"]["input"])


def test_unknown_model_uses_gpt4_prices():
    cost = TokenCounter("my-model").estimate_cost(1000)
    assert cost.model == "my-model"
    assert cost.input_cost == pytest.approx(MODEL_COSTS["gpt-4"]["input"])


# ---------------------------------------------------------------------------
# Encoding resolution (real loader, fake tiktoken module)
# ---------------------------------------------------------------------------

class _FakeEncoding:
    def __init__(self, name):
        self.name = name

    def encode(self, text, disallowed_special=()):
        return list(range(len(text.split())))

    def decode(self, ids):
        return "w"


def _fake_tiktoken():
    module = types.ModuleType("tiktoken")

    def encoding_for_model(model):
        if model.startswith("gpt-"):
            return _FakeEncoding("for-" + model)
        raise KeyError(model)

    module.encoding_for_model = encoding_for_model
    module.get_encoding = _FakeEncoding
    return module


def test_load_encoding_known_and_fallback(monkeypatch):
    monkeypatch.setitem(sys.modules, "tiktoken", _fake_tiktoken())
    monkeypatch.setattr(tokenizer, "_encoders", {})
    assert _load_encoding("gpt-4").name == "for-gpt-4"
    assert _load_encoding("claude-3-opus").name == "cl100k_base"


def test_load_encoding_failure_is_cached_as_none(monkeypatch):
    broken = types.ModuleType("tiktoken")

    def encoding_for_model(model):
        raise OSError("no network")

    broken.encoding_for_model = encoding_for_model
    monkeypatch.setitem(sys.modules, "tiktoken", broken)
    monkeypatch.setattr(tokenizer, "_encoders", {})
    assert _load_encoding("gpt-4") is None
    assert tokenizer._encoders == {"gpt-4": None}


def test_counter_uses_exact_encoding(monkeypatch):
    monkeypatch.setattr(tokenizer, "_load_encoding", lambda model: _FakeEncoding(model))
    counter = TokenCounter("gpt-4")
    assert counter.exact
    assert counter.count_tokens("one two three") == 3
    assert counter.analyze_tokens("one two").tokens == ["w", "w"]
