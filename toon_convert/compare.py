"""
JSON vs Toon comparison report.

For each data set the report measures three renderings of the same value:
pretty JSON (two-space indent), compact JSON and Toon, then totals the token
savings and prices them per 1000 API calls.

Reports are built as plain text; printing is left to the caller (run_all
takes an ``out`` callable).
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .encoder import ToonEncoder
from .samples import builtin_samples, sample_title
from .tokenizer import DEFAULT_MODEL, CostEstimate, TokenCounter
from .value import to_json

logger = logging.getLogger(__name__)

RULE = "─" * 50
DOUBLE_RULE = "═" * 50


def savings_pct(baseline: int, candidate: int) -> float:
    """Percent of baseline saved by candidate, 0 when baseline is 0."""
    if not baseline:
        return 0.0
    return round((baseline - candidate) / baseline * 100, 2)


@dataclass
class ComparisonResult:
    """Token and character counts of one data set in the three formats."""
    name: str
    pretty_tokens: int
    pretty_chars: int
    compact_tokens: int
    compact_chars: int
    toon_tokens: int
    toon_chars: int
    json_text: str = ""
    toon_text: str = ""

    @property
    def savings_vs_pretty(self) -> float:
        return savings_pct(self.pretty_tokens, self.toon_tokens)

    @property
    def savings_vs_compact(self) -> float:
        return savings_pct(self.compact_tokens, self.toon_tokens)

    @property
    def tokens_saved(self) -> int:
        return self.compact_tokens - self.toon_tokens


def compare_formats(data, name: str, counter: Optional[TokenCounter] = None,
                    encoder: Optional[ToonEncoder] = None) -> ComparisonResult:
    """Encode data three ways and count each.

    Returns:
        ComparisonResult; json_text is the pretty JSON, toon_text the Toon.
    """
    counter = counter or TokenCounter()
    encoder = encoder or ToonEncoder()

    pretty = to_json(data, pretty=True)
    compact = to_json(data)
    toon = encoder.encode(data)

    result = ComparisonResult(
        name=name,
        pretty_tokens=counter.count_tokens(pretty),
        pretty_chars=len(pretty),
        compact_tokens=counter.count_tokens(compact),
        compact_chars=len(compact),
        toon_tokens=counter.count_tokens(toon),
        toon_chars=len(toon),
        json_text=pretty,
        toon_text=toon,
    )
    logger.debug("%s: pretty=%d compact=%d toon=%d tokens", name,
                 result.pretty_tokens, result.compact_tokens, result.toon_tokens)
    return result


def preview(text: str, max_lines: int = 10) -> str:
    """First max_lines lines of text, marked when cut."""
    lines = text.split("\n")
    shown = "\n".join(lines[:max_lines])
    if len(lines) > max_lines:
        shown += "\n... (truncated)"
    return shown


def format_table(head: List[str], rows: List[List[str]]) -> str:
    """Render a boxed plain-text table. Cells may span several lines."""
    split_rows = [[str(cell).split("\n") for cell in row] for row in [head] + rows]
    widths = [
        max(len(line) for row in split_rows for line in row[col])
        for col in range(len(head))
    ]

    def border(left, mid, right):
        return left + mid.join("─" * (w + 2) for w in widths) + right

    out = [border("┌", "┬", "┐")]
    for idx, row in enumerate(split_rows):
        height = max(len(cell) for cell in row)
        for line_no in range(height):
            cells = [
                (cell[line_no] if line_no < len(cell) else "").ljust(widths[col])
                for col, cell in enumerate(row)
            ]
            out.append("│ " + " │ ".join(cells) + " │")
        if idx < len(split_rows) - 1:
            out.append(border("├", "┼", "┤"))
    out.append(border("└", "┴", "┘"))
    return "\n".join(out)


class FormatComparison:
    """Runs comparisons over several data sets and reports on them.

    Usage:
        comparison = FormatComparison("gpt-4")
        comparison.compare(data, "User List")
        print(comparison.render_summary())
    """

    def __init__(self, model: str = DEFAULT_MODEL, counter: Optional[TokenCounter] = None,
                 encoder: Optional[ToonEncoder] = None):
        self.counter = counter or TokenCounter(model)
        self.encoder = encoder or ToonEncoder()
        self.results: List[ComparisonResult] = []

    @property
    def model(self) -> str:
        return self.counter.model

    def compare(self, data, name: str) -> ComparisonResult:
        result = compare_formats(data, name, counter=self.counter, encoder=self.encoder)
        self.results.append(result)
        return result

    def summary(self) -> dict:
        """Averages and totals over every comparison so far."""
        n = len(self.results)
        total_json = sum(r.compact_tokens for r in self.results)
        total_toon = sum(r.toon_tokens for r in self.results)
        return {
            "datasets": n,
            "avg_savings_vs_pretty": round(sum(r.savings_vs_pretty for r in self.results) / n, 2) if n else 0.0,
            "avg_savings_vs_compact": round(sum(r.savings_vs_compact for r in self.results) / n, 2) if n else 0.0,
            "total_json_tokens": total_json,
            "total_toon_tokens": total_toon,
            "total_tokens_saved": total_json - total_toon,
        }

    def cost_rows(self, calls: int = 1000) -> List[dict]:
        """Input cost of each data set over ``calls`` requests, JSON vs Toon."""
        rows = []
        for r in self.results:
            json_cost = self.counter.estimate_cost(r.compact_tokens * calls)
            toon_cost = self.counter.estimate_cost(r.toon_tokens * calls)
            rows.append({
                "name": r.name,
                "json_cost": json_cost.input_cost,
                "toon_cost": toon_cost.input_cost,
                "savings_pct": r.savings_vs_compact,
            })
        return rows

    def render_table(self, result: ComparisonResult) -> str:
        return format_table(
            ["Format", "Tokens", "Characters", "Token Savings"],
            [
                ["JSON (Pretty)", str(result.pretty_tokens), str(result.pretty_chars), "-"],
                ["JSON (Compact)", str(result.compact_tokens), str(result.compact_chars), "-"],
                ["Toon", str(result.toon_tokens), str(result.toon_chars),
                 f"{result.savings_vs_pretty:.2f}% vs Pretty\n{result.savings_vs_compact:.2f}% vs Compact"],
            ],
        )

    def render_samples(self, result: ComparisonResult, max_lines: int = 10) -> str:
        return "\n".join([
            "📝 Sample Output Comparison:",
            RULE,
            "JSON Format:",
            preview(result.json_text, max_lines),
            "",
            "Toon Format:",
            preview(result.toon_text, max_lines),
        ])

    def render_summary(self) -> str:
        s = self.summary()
        return "\n".join([
            "📈 Summary Statistics:",
            RULE,
            f"• Average Token Savings (vs Pretty JSON): {s['avg_savings_vs_pretty']:.2f}%",
            f"• Average Token Savings (vs Compact JSON): {s['avg_savings_vs_compact']:.2f}%",
            f"• Total Tokens Saved: {s['total_tokens_saved']} tokens",
            f"• Total JSON Tokens: {s['total_json_tokens']}",
            f"• Total Toon Tokens: {s['total_toon_tokens']}",
        ])

    def render_costs(self, calls: int = 1000) -> str:
        rows = [
            [row["name"], CostEstimate.format(row["json_cost"]),
             CostEstimate.format(row["toon_cost"]), f"{row['savings_pct']:.2f}%"]
            for row in self.cost_rows(calls)
        ]
        return "\n".join([
            f"💰 Cost Analysis (per {calls} API calls):",
            RULE,
            format_table(["Dataset", "JSON Cost", "Toon Cost", "Savings"], rows),
        ])

    def run_all(self, samples: Optional[dict] = None, out: Callable[[str], None] = print) -> List[ComparisonResult]:
        """Compare every sample set and write the full report through out."""
        if samples is None:
            samples = builtin_samples()

        out("🚀 JSON vs Toon Format Comparison Tool")
        out(DOUBLE_RULE)
        out(f"Model: {self.model}" + ("" if self.counter.exact else " (estimated counts)"))

        for key, data in samples.items():
            name = sample_title(key)
            out(f"\n📊 Analyzing: {name}")
            out(RULE)
            result = self.compare(data, name)
            out(self.render_table(result))
            out("")
            out(self.render_samples(result))

        out("")
        out(self.render_summary())
        out("")
        out(self.render_costs())
        return self.results
