"""StudioMate command-line entry point."""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from studiomate.config import LOG_PATH, ensure_data_dir, load_profile, profile_exists
from studiomate.matching.matcher import DEFAULT_MATCH_LIMIT, find_matches
from studiomate.matching.scorer import get_match_color
from studiomate.output.export import export_matches
from studiomate.processing.normalizer import OpportunityNormalizer
from studiomate.profile.models import CareerStage
from studiomate.storage.database import get_session, init_db
from studiomate.storage.repository import (
    add_opportunities,
    count_by_type,
    count_opportunities,
    list_open_opportunities,
    save_matches,
)

logger = logging.getLogger(__name__)

console = Console()

CAREER_STAGES = ", ".join(stage.value for stage in CareerStage)

# Tailwind-style color tags mapped to rich styles
RICH_STYLES = {
    "text-green-600": "green",
    "text-blue-600": "blue",
    "text-yellow-600": "yellow",
    "text-gray-600": "bright_black",
}


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure application logging."""
    ensure_data_dir()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    log_path = str(LOG_PATH.resolve())
    has_file_handler = any(
        isinstance(handler, logging.FileHandler)
        and handler.baseFilename == log_path
        for handler in root_logger.handlers
    )
    if not has_file_handler:
        file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)


def cmd_import(args: argparse.Namespace) -> int:
    path = Path(args.csv)
    if not path.exists():
        console.print(f"[red]File not found:[/red] {path}")
        return 1

    opportunities = OpportunityNormalizer().load_csv(path)
    with get_session() as session:
        add_opportunities(session, opportunities)

    console.print(f"Imported [bold]{len(opportunities)}[/bold] opportunities from {path}")
    return 0


def cmd_match(args: argparse.Namespace) -> int:
    profile_path = Path(args.profile) if args.profile else None
    if not profile_exists(profile_path):
        console.print("[red]No artist profile found.[/red] Create profile.yaml in the data directory first.")
        return 1

    artist = load_profile(profile_path)
    if artist.is_empty():
        console.print("[yellow]Profile has no location, career stage, mediums or regions to match on.[/yellow]")
    elif artist.career_stage and artist.known_career_stage() is None:
        console.print(
            f"[yellow]Career stage {artist.career_stage!r} is not one of {CAREER_STAGES}; "
            "it will only match eligibility text that contains it.[/yellow]"
        )

    now = datetime.now(timezone.utc)
    with get_session() as session:
        opportunities = list_open_opportunities(session, now)
        summary = find_matches(artist, opportunities, now=now, limit=args.limit)
        if args.save and artist.email:
            save_matches(session, artist.email, summary.matches)

    table = Table(title=f"Top {len(summary.matches)} of {summary.total_matches} matches")
    table.add_column("#", justify="right")
    table.add_column("Opportunity")
    table.add_column("Type")
    table.add_column("Deadline")
    table.add_column("Score", justify="right")
    table.add_column("Why")

    for i, match in enumerate(summary.matches, 1):
        style = RICH_STYLES.get(get_match_color(match.match_score), "")
        table.add_row(
            str(i),
            match.title,
            match.type,
            match.deadline.strftime("%Y-%m-%d"),
            f"[{style}]{match.match_score} {match.match_description}[/{style}]" if style else str(match.match_score),
            ", ".join(match.match_reasons),
        )
    console.print(table)

    if args.export:
        try:
            export_matches(summary.matches, args.export)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            return 1
        console.print(f"Exported matches to {args.export}")

    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    with get_session() as session:
        total = count_opportunities(session)
        breakdown = count_by_type(session)

    console.print(f"Total opportunities: [bold]{total}[/bold]")
    if breakdown:
        table = Table(title="Breakdown by type")
        table.add_column("Type")
        table.add_column("Count", justify="right")
        for type_, count in breakdown:
            table.add_row(type_ or "(none)", str(count))
        console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studiomate", description="Match artists to opportunities")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    imp = subparsers.add_parser("import", help="Import opportunities from a CSV export")
    imp.add_argument("csv", help="Path to opportunities CSV")
    imp.set_defaults(func=cmd_import)

    mat = subparsers.add_parser("match", help="Rank open opportunities for the saved profile")
    mat.add_argument("--profile", help="Path to profile YAML (default: data/profile.yaml)")
    mat.add_argument("--limit", type=int, default=DEFAULT_MATCH_LIMIT, help=f"Matches to show (default {DEFAULT_MATCH_LIMIT})")
    mat.add_argument("--export", help="Write matches to .json, .csv or .md")
    mat.add_argument("--save", action="store_true", help="Store matches for the profile's email")
    mat.set_defaults(func=cmd_match)

    sts = subparsers.add_parser("stats", help="Show opportunity counts by type")
    sts.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.INFO if args.verbose else logging.WARNING)
    init_db()

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
