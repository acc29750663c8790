"""Export functions for matched opportunities in multiple formats."""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import List

from studiomate.matching.scorer import ScoredOpportunity


def _ranked(matches: List[ScoredOpportunity]) -> List[ScoredOpportunity]:
    # Stable, so equal scores keep the order they were ranked in
    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def _format_deadline(match: ScoredOpportunity) -> str:
    return match.deadline.strftime("%Y-%m-%d")


def export_json(
    matches: List[ScoredOpportunity],
    filepath: str,
) -> None:
    """Export matches to JSON format.

    Args:
        matches: Scored opportunities
        filepath: Path to write JSON file

    Raises:
        IOError: If file cannot be written
    """
    export_data = {
        "exported_at": datetime.now().isoformat(),
        "total_matches": len(matches),
        "matches": [
            {"rank": i, **match.to_dict()}
            for i, match in enumerate(_ranked(matches), 1)
        ],
    }

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(export_data, f, indent=2, ensure_ascii=False)


def export_csv(
    matches: List[ScoredOpportunity],
    filepath: str,
) -> None:
    """Export matches to CSV format.

    Args:
        matches: Scored opportunities
        filepath: Path to write CSV file

    Raises:
        IOError: If file cannot be written
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank",
        "title",
        "organizer",
        "type",
        "location",
        "deadline",
        "match_score",
        "match",
        "reasons",
        "prize",
        "link",
    ]

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for i, match in enumerate(_ranked(matches), 1):
            writer.writerow({
                "rank": i,
                "title": match.title,
                "organizer": match.organizer,
                "type": match.type,
                "location": match.location,
                "deadline": _format_deadline(match),
                "match_score": match.match_score,
                "match": match.match_description,
                "reasons": "; ".join(match.match_reasons),
                "prize": match.prize if match.has_prize else "",
                "link": match.link or "",
            })


def export_markdown(
    matches: List[ScoredOpportunity],
    filepath: str,
) -> None:
    """Export matches to Markdown format.

    Args:
        matches: Scored opportunities
        filepath: Path to write Markdown file

    Raises:
        IOError: If file cannot be written
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "# Opportunity Matches",
        "",
        f"**Exported:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"**Total Matches:** {len(matches)}",
        "",
        "---",
        "",
    ]

    for i, match in enumerate(_ranked(matches), 1):
        lines.append(f"## {i}. {match.title}")
        lines.append("")
        lines.append(f"**Match:** {match.match_score}% ({match.match_description})")
        if match.organizer:
            lines.append(f"**Organizer:** {match.organizer}")
        if match.type:
            lines.append(f"**Type:** {match.type}")
        if match.location:
            lines.append(f"**Location:** {match.location}")
        lines.append(f"**Deadline:** {_format_deadline(match)}")
        if match.has_prize:
            lines.append(f"**Prize:** {match.prize}")
        lines.append("")

        if match.link:
            lines.append(f"**Apply:** [{match.link}]({match.link})")
            lines.append("")

        if match.match_reasons:
            lines.append("### Why it matches")
            lines.append("")
            for reason in match.match_reasons:
                lines.append(f"- {reason}")
            lines.append("")

        lines.append("---")
        lines.append("")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))


def export_matches(
    matches: List[ScoredOpportunity],
    filepath: str,
) -> None:
    """Export matches with format auto-detection from file extension.

    Args:
        matches: Scored opportunities
        filepath: Path to write file (extension determines format)

    Raises:
        ValueError: If file extension is not recognized
        IOError: If file cannot be written
    """
    path = Path(filepath)
    extension = path.suffix.lower()

    if extension == ".json":
        export_json(matches, filepath)
    elif extension == ".csv":
        export_csv(matches, filepath)
    elif extension in (".md", ".markdown"):
        export_markdown(matches, filepath)
    else:
        raise ValueError(
            f"Unsupported file format: {extension}. "
            "Supported formats: .json, .csv, .md, .markdown"
        )
