"""Output module for exporting matched opportunities."""

from studiomate.output.export import (
    export_json,
    export_csv,
    export_markdown,
    export_matches,
)

__all__ = [
    "export_json",
    "export_csv",
    "export_markdown",
    "export_matches",
]
