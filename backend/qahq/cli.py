"""Command-line interface for the daily question generation."""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from qahq.core.idea_queue import DEFAULT_BATCH_SIZE, DEFAULT_POOL_SIZE, GenerationRunSummary


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    for name in ("aiosqlite", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)


async def _run_generation(
    batch_size: int, pool_size: int, dry_run: bool
) -> GenerationRunSummary:
    from qahq.core.factory import build_idea_queue_processor
    from qahq.database.connection import init_db, close_db

    await init_db()
    try:
        processor = build_idea_queue_processor(batch_size=batch_size, pool_size=pool_size)
        return await processor.run(dry_run=dry_run)
    finally:
        await close_db()


def print_summary(result: GenerationRunSummary) -> None:
    """Print a human-readable run summary."""
    print()
    print("=" * 50)
    print("Generation summary")
    print("=" * 50)
    print(f"Run status: {result.status}")
    print(f"Published today before run: {result.published_today}")
    print(f"Remaining for today: {result.remaining}")
    if result.status == "dry_run":
        print(f"Would process: {len(result.selected_idea_ids)} ideas")
        for idea_id in result.selected_idea_ids:
            print(f"  - {idea_id}")
    else:
        print(f"Attempted: {result.attempted}")
        print(f"Successful: {result.successful}")
        print(f"Failed: {result.failed}")
        print(f"Duplicates: {result.duplicates}")
        if result.created_slugs:
            print("Created questions:")
            for slug in result.created_slugs:
                print(f"  - /questions/{slug}")
    print(result.summary)


def generate(args: argparse.Namespace) -> int:
    """Execute the generate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code, 1 when every attempted idea failed or the run crashed
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.dry_run:
        logger.info("DRY RUN: no ideas will be claimed and nothing is generated")

    try:
        result = asyncio.run(
            _run_generation(args.batch_size, args.pool_size, args.dry_run)
        )
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        return 1

    print_summary(result)

    if result.successful == 0 and result.failed > 0:
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qahq",
        description="Question and Answer HQ maintenance commands",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Turn queued ideas into published questions",
        description="Run one batch of the daily idea-to-question generation.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report which ideas would be processed",
    )
    generate_parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Daily target of published questions (default: {DEFAULT_BATCH_SIZE})",
    )
    generate_parser.add_argument(
        "--pool-size",
        type=int,
        default=DEFAULT_POOL_SIZE,
        help=f"Max ideas sampled per run (default: {DEFAULT_POOL_SIZE})",
    )
    generate_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable verbose (debug) logging",
    )
    generate_parser.set_defaults(func=generate)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


def generate_main() -> int:
    """Entry point of the qahq-generate script."""
    return main(["generate", *sys.argv[1:]])


if __name__ == "__main__":
    sys.exit(main())
