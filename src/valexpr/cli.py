"""Command-line interface for valexpr."""

from __future__ import annotations

import argparse
import io
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from valexpr.errors import ParseError
from valexpr.lexer import LexerOptions

OUTPUT_FORMATS = ("tree", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    expr: str | None
    output_file: Path | None
    lexer: LexerOptions
    output_format: str
    show_tokens: bool
    show_characters: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="valexpr",
        description="Tokenize and parse CSS-like value expressions",
    )
    p.add_argument("input", nargs="?", help="Input file ('-' for stdin)")
    p.add_argument("--expr", metavar="TEXT", help="Expression to parse instead of a file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument("--tokens", action="store_true", help="Print the token stream and stop")
    p.add_argument(
        "--characters",
        action="store_true",
        help="Print the classified characters and stop",
    )
    p.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="AST output format (default: tree)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover valexpr.toml)",
    )
    p.add_argument(
        "--split-operators",
        action="store_true",
        help="Emit one token per operator character",
    )
    p.add_argument("--normalize", action="store_true", help="NFC-normalize the source first")
    p.add_argument("--debug", action="store_true", help="Trace tokenizer stages to stderr")
    return p


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / "valexpr.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if args.input is None and args.expr is None:
        raise argparse.ArgumentTypeError("no input: give a file, '-' or --expr")
    if args.input is not None and args.expr is not None:
        raise argparse.ArgumentTypeError("give either an input file or --expr, not both")

    input_file = Path(args.input) if args.input is not None else None
    base_dir = Path(".")
    if input_file is not None and args.input != "-" and input_file.parent.parts:
        base_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)

    # Lexer options: config < CLI
    merge_operators = True
    normalize = False
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        if isinstance(cfg_lexer.get("merge_operators"), bool):
            merge_operators = cfg_lexer["merge_operators"]
        if isinstance(cfg_lexer.get("normalize"), bool):
            normalize = cfg_lexer["normalize"]
    if args.split_operators:
        merge_operators = False
    if args.normalize:
        normalize = True

    # Output format: config < CLI
    output_format = "tree"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict) and "format" in cfg_output:
        output_format = str(cfg_output["format"])
        if output_format not in OUTPUT_FORMATS:
            raise argparse.ArgumentTypeError(
                f"invalid output format in config: {output_format!r}"
            )
    if args.format is not None:
        output_format = args.format

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        expr=args.expr,
        output_file=output_file,
        lexer=LexerOptions(merge_operators=merge_operators, normalize=normalize),
        output_format=output_format,
        show_tokens=args.tokens,
        show_characters=args.characters,
        debug=args.debug,
    )


def source_name(options: CliOptions) -> str:
    """Display name of the input, used in error messages."""
    if options.expr is not None:
        return "<expr>"
    if options.input_file is None or str(options.input_file) == "-":
        return "<stdin>"
    return str(options.input_file)


def read_source(options: CliOptions) -> str:
    if options.expr is not None:
        return options.expr
    if options.input_file is None or str(options.input_file) == "-":
        return sys.stdin.read()
    return options.input_file.read_text(encoding="utf-8")


def process(options: CliOptions) -> str:
    """Read the input, then tokenize and parse it, returning the text to output."""
    from valexpr.debug import ast_to_dict, dump_ast, dump_characters, dump_tokens
    from valexpr.lexer import Tokenizer
    from valexpr.parser import parse_tokens

    source = read_source(options)
    tokenizer = Tokenizer(options.lexer)
    if options.debug:
        tokenizer.with_logging(source_name(options))

    out = io.StringIO()
    if options.show_characters:
        dump_characters(tokenizer.get_characters(source), file=out)
        return out.getvalue()

    tokens = tokenizer.tokenize(source)
    if options.show_tokens:
        dump_tokens(tokens, file=out)
        return out.getvalue()

    program = parse_tokens(tokens, source)
    if options.output_format == "json":
        return json.dumps(ast_to_dict(program), indent=2) + "\n"
    dump_ast(program, file=out)
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        result = process(options)
    except ParseError as exc:
        print(exc.format(source_name(options)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)

    return 0
