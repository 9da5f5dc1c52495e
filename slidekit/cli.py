"""
slidekit CLI - Command-line interface for deck files.

Usage:
    slidekit render <deck.json> [--slide N]    Render a slide to JSON
    slidekit score <deck.json>                 Print score totals
    slidekit validate <deck.json>              Validate a deck

A deck file holds either a list of slides or {"slides": [...]}.
"""

import argparse
import json
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="slidekit - editable slide decks of interactive elements",
        prog="slidekit",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("SLIDEKIT_LOG_LEVEL", "INFO"),
        help="Logging level (default: $SLIDEKIT_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    render_parser = subparsers.add_parser("render", help="Render a slide to JSON")
    render_parser.add_argument("deck_file", help="Path to deck JSON file")
    render_parser.add_argument("--slide", type=int, default=0, help="Slide index")
    render_parser.add_argument(
        "--types",
        help="Comma-separated type tags to render; others become placeholders",
    )

    score_parser = subparsers.add_parser("score", help="Print score totals")
    score_parser.add_argument("deck_file", help="Path to deck JSON file")

    validate_parser = subparsers.add_parser("validate", help="Validate a deck")
    validate_parser.add_argument("deck_file", help="Path to deck JSON file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "render":
        return cmd_render(args)
    elif args.command == "score":
        return cmd_score(args)
    elif args.command == "validate":
        return cmd_validate(args)
    else:
        parser.print_help()
        return 1


def _load_deck(path):
    """Read a deck file; exits with status 1 on any problem."""
    from .schema import CollectionValidationError, load_collection

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {path}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        return load_collection(data)
    except CollectionValidationError as e:
        for error in e.errors:
            print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)


def cmd_render(args):
    """Render one slide through JSON renderers."""
    from .render import RenderReport, collect_types, json_registry, render_slide, to_jsonable

    collection = _load_deck(args.deck_file)
    if args.types:
        types = [t.strip() for t in args.types.split(",") if t.strip()]
    else:
        types = collect_types(collection)

    report = RenderReport()
    nodes = render_slide(collection, json_registry(types), slide_index=args.slide, report=report)
    print(json.dumps(to_jsonable(nodes), indent=2))

    if report.unknown_types:
        print(f"Unrendered types: {', '.join(report.unknown_types)}", file=sys.stderr)
    return 0


def cmd_score(args):
    """Print total and current score."""
    from .store import TreeStore

    store = TreeStore(initial=_load_deck(args.deck_file))
    summary = store.score_summary()
    print(f"Elements: {summary.element_count}")
    print(f"Total score: {summary.total}")
    print(f"Current score: {summary.current} ({summary.percent}%)")
    return 0


def cmd_validate(args):
    """Validate a deck file."""
    from .schema import validate_collection

    result = validate_collection(_load_deck(args.deck_file))

    if result.warnings:
        print("Warnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("Errors:")
        for e in result.errors:
            print(f"  - {e}")
        return 1

    print("Deck is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
