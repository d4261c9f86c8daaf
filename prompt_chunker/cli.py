"""Command-line interface for the prompt chunker."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .catalog import (
    get_free_models,
    get_model_config,
    get_models_by_provider,
    get_paid_models,
    get_supported_models,
)
from .chunker import TextChunker
from .config import get_config
from .exceptions import ChunkConfigurationError, ModelCatalogError, format_error_chain
from .logging_config import get_logger, setup_logging
from .model_limits import recommend_model
from .token_counter import compare_token_counts, estimate_tokens

logger = get_logger(__name__)


def _read_text(source: Optional[str]) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _print_chunks(chunker: TextChunker, chunks: list[str], as_json: bool) -> None:
    if as_json:
        _print_json({
            "model": chunker.model,
            "chunks": chunks,
            "stats": chunker.stats(chunks).model_dump(),
        })
        return

    total = len(chunks)
    for i, chunk in enumerate(chunks, start=1):
        tokens = estimate_tokens(chunk, chunker.model).tokens
        print(f"--- chunk {i}/{total} ({tokens} tokens) ---")
        print(chunk)
    stats = chunker.stats(chunks)
    if stats.is_empty:
        print("No chunks.")
    else:
        print(
            f"\n{stats.total_chunks} chunks, {stats.total_tokens} tokens "
            f"(min {stats.min_tokens:.0f}, avg {stats.average_tokens:.1f}, max {stats.max_tokens:.0f})"
        )


def cmd_chunk(args: argparse.Namespace) -> int:
    chunker = TextChunker(args.model)
    chunks = chunker.chunk(
        _read_text(args.file),
        max_tokens=args.max_tokens,
        overlap=args.overlap,
        preserve_sentences=args.sentences,
        preserve_words=not args.characters,
    )
    _print_chunks(chunker, chunks, args.json)
    return 0


def cmd_chunk_for_model(args: argparse.Namespace) -> int:
    chunker = TextChunker(args.model)
    chunks = chunker.chunk_for_model(_read_text(args.file), overlap_percent=args.overlap_percent)
    _print_chunks(chunker, chunks, args.json)
    return 0


def cmd_estimate(args: argparse.Namespace) -> int:
    text = _read_text(args.file)
    if args.compare:
        comparison = compare_token_counts(text, args.model)
        if args.json:
            _print_json(comparison.model_dump())
        else:
            print(f"Model:     {comparison.estimated.model}")
            print(f"Estimated: {comparison.estimated.tokens} tokens")
            print(f"Actual:    {comparison.actual.tokens} tokens (cl100k_base)")
            print(f"Accuracy:  {comparison.accuracy:.1%}")
        return 0

    estimate = estimate_tokens(text, args.model)
    if args.json:
        _print_json(estimate.model_dump())
    else:
        print(f"Model:      {estimate.model}")
        print(f"Tokens:     {estimate.tokens}")
        print(f"Characters: {estimate.characters}")
        print(f"Words:      {estimate.words}")
        print(f"Cost:       ${estimate.estimated_cost:.6f}")
    return 0


def cmd_recommend(args: argparse.Namespace) -> int:
    recommendation = recommend_model(_read_text(args.file), margin=args.margin)
    if args.json:
        _print_json(recommendation.model_dump())
    else:
        print(f"{recommendation.model}: {recommendation.reason}")
    return 0


def cmd_models(args: argparse.Namespace) -> int:
    if args.free:
        models = get_free_models()
    elif args.paid:
        models = get_paid_models()
    elif args.provider:
        models = get_models_by_provider(args.provider)
    else:
        models = get_supported_models()

    configs = {model: get_model_config(model) for model in models}
    if args.json:
        _print_json({model: config.model_dump() for model, config in configs.items()})
    else:
        for model, config in configs.items():
            print(f"{model:<50} {config.context_length:>9} tokens  ${config.cost_per_token:.8f}/token")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt-chunker",
        description="Estimate tokens and split prompt text into token-budgeted chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s chunk notes.txt --max-tokens 200 --overlap 10
  %(prog)s chunk-for-model report.md --model anthropic/claude-sonnet-4
  cat prompt.txt | %(prog)s estimate --model openai/gpt-4.1 --compare
  %(prog)s recommend book.txt --margin 0.2
  %(prog)s models --free
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_file(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "file",
            nargs="?",
            default=None,
            help="Input text file (default: stdin)",
        )

    chunk = subparsers.add_parser("chunk", help="Split text with an explicit token budget")
    add_file(chunk)
    chunk.add_argument("--max-tokens", type=int, required=True, help="Token budget per chunk")
    chunk.add_argument("--overlap", type=int, default=0, help="Units repeated between chunks (default: 0)")
    chunk.add_argument("--sentences", action="store_true", help="Split at sentence boundaries")
    chunk.add_argument("--characters", action="store_true", help="Split anywhere, ignoring word boundaries")
    chunk.add_argument("--model", default=None, help="Model used for token estimation")
    chunk.set_defaults(func=cmd_chunk)

    for_model = subparsers.add_parser("chunk-for-model", help="Split text to fit a model's context window")
    add_file(for_model)
    for_model.add_argument("--model", default=None, help="Target model")
    for_model.add_argument(
        "--overlap-percent",
        type=float,
        default=None,
        help="Overlap as a percentage of the derived budget (default: from config)",
    )
    for_model.set_defaults(func=cmd_chunk_for_model)

    estimate = subparsers.add_parser("estimate", help="Estimate token count and cost")
    add_file(estimate)
    estimate.add_argument("--model", default=None, help="Model used for estimation and pricing")
    estimate.add_argument(
        "--compare",
        action="store_true",
        help="Compare against the cl100k_base reference tokenizer",
    )
    estimate.set_defaults(func=cmd_estimate)

    recommend = subparsers.add_parser("recommend", help="Recommend the smallest model that fits the text")
    add_file(recommend)
    recommend.add_argument("--margin", type=float, default=None, help="Safety margin, e.g. 0.1 for 10%%")
    recommend.set_defaults(func=cmd_recommend)

    models = subparsers.add_parser("models", help="List known models")
    group = models.add_mutually_exclusive_group()
    group.add_argument("--free", action="store_true", help="Only free models")
    group.add_argument("--paid", action="store_true", help="Only paid models")
    group.add_argument("--provider", default=None, help="Only models of this provider")
    models.set_defaults(func=cmd_models)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except ChunkConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    log_level = logging.DEBUG if args.verbose else (logging.ERROR if args.quiet else config.log_level)
    setup_logging(level=log_level)

    try:
        return args.func(args)
    except ChunkConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except ModelCatalogError as exc:
        logger.error("%s", format_error_chain(exc))
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read input: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
