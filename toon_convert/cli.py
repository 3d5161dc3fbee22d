"""
Command-line interface: ``toon-convert``.

Subcommands:
    convert [FILE]   JSON -> Toon with a token analysis (--decode for Toon -> JSON)
    compare          full JSON vs Toon report over the sample sets
    demo             quick before/after on a typical API response
    interactive      menu-driven converter (default)
"""

import argparse
import logging
import sys
from typing import Callable, Optional

from . import __version__
from .compare import DOUBLE_RULE, RULE, FormatComparison, savings_pct
from .decoder import ToonDecoder
from .encoder import DEFAULT_INDENT, ToonEncoder
from .errors import InvalidJSONError, StructureError
from .samples import builtin_samples, demo_payload, example_conversions, load_samples
from .tokenizer import DEFAULT_MODEL, CostEstimate, TokenCounter
from .value import from_json, to_json

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_STRUCTURE = 2


def read_json_block(input_fn: Callable[[str], str] = input, prompt: str = "") -> str:
    """Read lines until the first blank line (or end of input)."""
    lines = []
    while True:
        try:
            line = input_fn(prompt)
        except EOFError:
            break
        if line == "":
            break
        lines.append(line)
    return "\n".join(lines) + ("\n" if lines else "")


class Session:
    """One converter session: shared encoder, decoder, counter and output."""

    def __init__(self, model: str = DEFAULT_MODEL, indent: int = DEFAULT_INDENT,
                 escape_strings: bool = True, out: Callable[[str], None] = print,
                 input_fn: Callable[[str], str] = input):
        self.counter = TokenCounter(model)
        self.encoder = ToonEncoder(indent=indent, escape_strings=escape_strings)
        self.decoder = ToonDecoder(unescape=escape_strings)
        self.out = out
        self.input_fn = input_fn

    def report_error(self, error: Exception) -> int:
        if isinstance(error, InvalidJSONError):
            self.out("❌ Invalid JSON format. Please try again.")
            self.out(str(error))
            return EXIT_INVALID_INPUT
        self.out("❌ Cannot encode this structure.")
        self.out(str(error))
        return EXIT_STRUCTURE

    # ── Operations ──────────────────────────────────────────────────────────

    def convert(self, json_text: str) -> int:
        """Print the Toon form of json_text and its token savings."""
        try:
            data = from_json(json_text)
            toon = self.encoder.encode(data)
        except (InvalidJSONError, StructureError) as e:
            return self.report_error(e)

        self.out("\n✅ Toon Format Output:")
        self.out(RULE)
        self.out(toon)

        json_tokens = self.counter.count_tokens(json_text)
        toon_tokens = self.counter.count_tokens(toon)
        self.out("\n📊 Token Analysis:")
        self.out(RULE)
        self.out(f"JSON Tokens: {json_tokens}")
        self.out(f"Toon Tokens: {toon_tokens}")
        self.out(f"Token Savings: {savings_pct(json_tokens, toon_tokens):.2f}%")
        return EXIT_OK

    def decode(self, toon_text: str) -> int:
        """Print what the decoder recovers from toon_text, as JSON."""
        self.out(to_json(self.decoder.decode(toon_text), pretty=True))
        return EXIT_OK

    def compare_usage(self, json_text: str) -> int:
        """Per-format token analysis plus the input cost per 1000 requests."""
        try:
            data = from_json(json_text)
            toon = self.encoder.encode(data)
        except (InvalidJSONError, StructureError) as e:
            return self.report_error(e)

        compact = to_json(data)
        formats = [
            ("JSON (Compact)", compact),
            ("JSON (Pretty)", to_json(data, pretty=True)),
            ("Toon Format", toon),
        ]
        self.out("\n📈 Detailed Token Analysis:")
        self.out(RULE)
        for name, text in formats:
            analysis = self.counter.analyze_tokens(text)
            self.out(f"\n{name}:")
            self.out(f"  • Tokens: {analysis.count}")
            self.out(f"  • Characters: {analysis.text_length}")
            self.out(f"  • Avg Token Length: {analysis.average_token_length:.2f}")

        compact_tokens = self.counter.count_tokens(compact)
        toon_tokens = self.counter.count_tokens(toon)
        json_cost = self.counter.estimate_cost(compact_tokens * 1000)
        toon_cost = self.counter.estimate_cost(toon_tokens * 1000)
        self.out("\n💰 Cost Estimation (per 1000 requests):")
        self.out(RULE)
        self.out(f"JSON Input Cost: {CostEstimate.format(json_cost.input_cost)}")
        self.out(f"Toon Input Cost: {CostEstimate.format(toon_cost.input_cost)}")
        self.out(f"Cost Savings: {savings_pct(compact_tokens, toon_tokens):.2f}%")
        return EXIT_OK

    def show_examples(self) -> None:
        self.out("\n📚 Example Conversions")
        self.out(DOUBLE_RULE)
        for title, data in example_conversions():
            json_text = to_json(data, pretty=True)
            toon = self.encoder.encode(data)
            self.out(f"\n📌 {title}:")
            self.out("─" * 40)
            self.out("JSON:")
            self.out(json_text)
            self.out("\nToon:")
            self.out(toon)
            json_tokens = self.counter.count_tokens(json_text)
            toon_tokens = self.counter.count_tokens(toon)
            self.out(f"\nTokens: JSON={json_tokens}, Toon={toon_tokens}, "
                     f"Savings={savings_pct(json_tokens, toon_tokens):.2f}%")

    def demo(self) -> int:
        """Before/after on the demo payload with the cost of 1M calls."""
        data = demo_payload()
        pretty = to_json(data, pretty=True)
        compact = to_json(data)
        toon = self.encoder.encode(data)

        self.out("\n🚀 JSON vs Toon Format - Quick Demo")
        self.out(DOUBLE_RULE)
        self.out("\n📄 Original JSON (Pretty):")
        self.out(RULE)
        self.out(pretty)
        self.out("\n📄 Toon Format:")
        self.out(RULE)
        self.out(toon)

        pretty_tokens = self.counter.count_tokens(pretty)
        compact_tokens = self.counter.count_tokens(compact)
        toon_tokens = self.counter.count_tokens(toon)

        self.out("\n📊 Token Usage Comparison:")
        self.out(RULE)
        self.out(f"{'Format':<20} {'Tokens':<9} Characters")
        self.out(f"{'JSON (Pretty)':<20} {pretty_tokens:<9} {len(pretty)}")
        self.out(f"{'JSON (Compact)':<20} {compact_tokens:<9} {len(compact)}")
        self.out(f"{'Toon Format':<20} {toon_tokens:<9} {len(toon)}")

        self.out("\n💡 Token Savings:")
        self.out(RULE)
        self.out(f"• vs Pretty JSON:  {savings_pct(pretty_tokens, toon_tokens):.1f}% reduction")
        self.out(f"• vs Compact JSON: {savings_pct(compact_tokens, toon_tokens):.1f}% reduction")

        calls = 1_000_000
        json_cost = self.counter.estimate_cost(compact_tokens * calls).input_cost
        toon_cost = self.counter.estimate_cost(toon_tokens * calls).input_cost
        self.out("\n💰 Cost Impact (1M API calls):")
        self.out(RULE)
        self.out(f"• JSON Cost:  ${json_cost:,.2f}")
        self.out(f"• Toon Cost:  ${toon_cost:,.2f}")
        self.out(f"• You Save:   ${json_cost - toon_cost:,.2f}")
        return EXIT_OK

    # ── Interactive menu ────────────────────────────────────────────────────

    def _ask_json(self, title: str) -> str:
        self.out(f"\n{title}")
        self.out(RULE)
        self.out("Enter your JSON (press Enter on an empty line when done):")
        return read_json_block(self.input_fn)

    def _pause(self) -> None:
        try:
            self.input_fn("\nPress Enter to continue...")
        except EOFError:
            pass

    def interactive(self) -> int:
        self.out("╔══════════════════════════════════════════════╗")
        self.out("║     JSON to Toon Format Converter Tool       ║")
        self.out("╚══════════════════════════════════════════════╝")
        self.out("\nToon format reduces token usage for LLMs by dropping")
        self.out("redundant JSON syntax.\n")

        while True:
            self.out("Choose an option:")
            self.out("1. Convert JSON to Toon format")
            self.out("2. Compare token usage")
            self.out("3. View example conversions")
            self.out("4. Exit")
            try:
                choice = self.input_fn("Enter your choice (1-4): ").strip()
            except EOFError:
                break

            if choice == "1":
                self.convert(self._ask_json("📝 JSON to Toon Converter"))
                self._pause()
            elif choice == "2":
                self.compare_usage(self._ask_json("📊 Token Usage Comparison"))
                self._pause()
            elif choice == "3":
                self.show_examples()
                self._pause()
            elif choice == "4":
                break
            else:
                self.out("Invalid choice. Please try again.")

        self.out("\n👋 Thank you for using Toon Converter!")
        return EXIT_OK


def _read_source(path: Optional[str]) -> str:
    if not path:
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _indent_width(text: str) -> int:
    width = int(text)
    if width < 0:
        raise argparse.ArgumentTypeError(f"indent must be >= 0, got {width}")
    return width


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toon-convert",
        description="Convert JSON to the compact Toon format and measure the token savings.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--model", default=DEFAULT_MODEL,
                        help=f"model for token counts and prices (default: {DEFAULT_MODEL})")
    parser.add_argument("--indent", type=_indent_width, default=DEFAULT_INDENT,
                        help="spaces per nesting level (default: 2)")
    parser.add_argument("--no-escape", action="store_true",
                        help="write quoted strings without backslash escapes")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command")

    convert = sub.add_parser("convert", help="convert a JSON file (or stdin) to Toon")
    convert.add_argument("file", nargs="?", help="input file; stdin when omitted")
    convert.add_argument("--decode", action="store_true", help="read Toon and print the decoded JSON")

    compare = sub.add_parser("compare", help="compare JSON and Toon over the sample sets")
    compare.add_argument("--samples", help="sample pack name or JSON file instead of the built-in sets")
    compare.add_argument("--seed", type=int, help="seed for the generated large data set")

    sub.add_parser("demo", help="quick before/after demo")
    sub.add_parser("interactive", help="menu-driven converter")
    return parser


def main(argv: Optional[list] = None, out: Callable[[str], None] = print,
         input_fn: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = Session(model=args.model, indent=args.indent, escape_strings=not args.no_escape,
                      out=out, input_fn=input_fn)
    command = args.command or "interactive"
    logger.debug("command=%s model=%s", command, args.model)

    try:
        if command == "convert":
            text = _read_source(args.file)
        elif command == "compare":
            samples = load_samples(args.samples) if args.samples else builtin_samples(seed=args.seed)
    except (OSError, ValueError) as e:
        out(f"❌ {e}")
        return EXIT_INVALID_INPUT

    if command == "convert":
        return session.decode(text) if args.decode else session.convert(text)

    if command == "compare":
        comparison = FormatComparison(counter=session.counter, encoder=session.encoder)
        try:
            comparison.run_all(samples, out=out)
        except StructureError as e:
            return session.report_error(e)
        return EXIT_OK

    if command == "demo":
        return session.demo()

    return session.interactive()


if __name__ == "__main__":
    sys.exit(main())
