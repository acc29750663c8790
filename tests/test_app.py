"""
Tests for the command-line commands.
"""

import argparse
import json
from datetime import datetime, timedelta, timezone

from studiomate.app import build_parser, cmd_import, cmd_match, cmd_stats
from studiomate.config import save_profile
from studiomate.storage.database import get_session
from studiomate.storage.repository import count_opportunities, list_saved_matches


def _write_csv(path):
    soon = (datetime.now(timezone.utc) + timedelta(days=14)).strftime("%d/%m/%Y")
    path.write_text(
        "title,organizer,description,location,type,deadline,link,eligibility,artTypes,fee,prize\n"
        f"Local Grant,Council,Support,\"Sydney, NSW\",Grant,{soon},,Emerging artists,painting,na,$3000\n"
        "Old Prize,Gallery,Closed,London,Prize,01/01/2020,,All artists,,na,NA\n",
        encoding="utf-8",
    )


class TestParser:
    """Argument parsing."""

    def test_match_defaults(self):
        args = build_parser().parse_args(["match"])
        assert args.limit == 10
        assert args.export is None
        assert args.func is cmd_match

    def test_import_requires_path(self):
        args = build_parser().parse_args(["import", "opps.csv"])
        assert args.csv == "opps.csv"


class TestCommands:
    """Commands against a temporary database."""

    def test_import_then_stats(self, db, tmp_path):
        csv_path = tmp_path / "opps.csv"
        _write_csv(csv_path)

        assert cmd_import(argparse.Namespace(csv=str(csv_path))) == 0
        with get_session() as session:
            assert count_opportunities(session) == 2

        assert cmd_stats(argparse.Namespace()) == 0

    def test_import_missing_file(self, db, tmp_path):
        assert cmd_import(argparse.Namespace(csv=str(tmp_path / "missing.csv"))) == 1

    def test_match_without_profile(self, db, tmp_path):
        args = argparse.Namespace(profile=str(tmp_path / "none.yaml"), limit=10, export=None, save=False)
        assert cmd_match(args) == 1

    def test_match_exports_and_saves(self, db, tmp_path, sydney_artist):
        csv_path = tmp_path / "opps.csv"
        _write_csv(csv_path)
        cmd_import(argparse.Namespace(csv=str(csv_path)))
        profile_path = save_profile(sydney_artist, tmp_path / "profile.yaml")
        export_path = tmp_path / "matches.json"

        args = argparse.Namespace(
            profile=str(profile_path), limit=5, export=str(export_path), save=True
        )
        assert cmd_match(args) == 0

        data = json.loads(export_path.read_text(encoding="utf-8"))
        assert [m["title"] for m in data["matches"]] == ["Local Grant"]
        assert data["matches"][0]["matchScore"] == 100

        with get_session() as session:
            saved = list_saved_matches(session, "alex@example.com")
            assert len(saved) == 1

    def test_match_bad_export_extension(self, db, tmp_path, sydney_artist):
        profile_path = save_profile(sydney_artist, tmp_path / "profile.yaml")
        args = argparse.Namespace(
            profile=str(profile_path), limit=5, export=str(tmp_path / "m.txt"), save=False
        )
        assert cmd_match(args) == 1

    def test_match_warns_on_free_text_career_stage(self, db, tmp_path, sydney_artist, capsys):
        artist = sydney_artist.model_copy(update={"career_stage": "late bloomer"})
        profile_path = save_profile(artist, tmp_path / "profile.yaml")
        args = argparse.Namespace(profile=str(profile_path), limit=5, export=None, save=False)

        assert cmd_match(args) == 0

        out = " ".join(capsys.readouterr().out.split())
        assert "not one of emerging, mid, established" in out
