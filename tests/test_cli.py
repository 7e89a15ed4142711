"""
Smoke tests for the command line interface.
"""
import json
import sys

import pytest

import main as cli


class TestParser:

    def test_playlist_options(self):
        args = cli.create_parser().parse_args([
            "playlist", "--joy", "0.8", "--length", "7", "--genre", "pop", "--genre", "funk",
            "--energy", "high", "--exclude-explicit", "--no-popular"
        ])
        profile = cli.profile_from_args(args)
        options = cli.options_from_args(args)
        assert profile.emotions["joy"] == 0.8
        assert options["playlist_length"] == 7
        assert options["genre_preferences"] == ("pop", "funk")
        assert options["energy_preference"] == "high"
        assert options["exclude_explicit"] is True
        assert options["include_popular"] is False
        assert options["include_discovery"] is True

    def test_length_is_optional(self):
        args = cli.create_parser().parse_args(["playlist"])
        assert "playlist_length" not in cli.options_from_args(args)

    def test_profile_file(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"emotions": {"trust": 0.7}, "sentiment": 0.2}))
        args = cli.create_parser().parse_args(["target", "--profile", str(path), "--joy", "0.9"])
        profile = cli.profile_from_args(args)
        assert profile.emotions["trust"] == 0.7
        assert profile.emotions["joy"] == 0.0


class TestMain:

    def run(self, monkeypatch, *argv):
        monkeypatch.setattr(sys, "argv", ["main.py", *argv])
        cli.main()

    def test_target(self, monkeypatch, capsys):
        self.run(monkeypatch, "target", "--joy", "0.9", "--time", "night")
        out = capsys.readouterr().out
        assert "MOODWAVE TARGET PROFILE" in out
        assert "Dominant emotions: joy (0.90)" in out

    def test_playlist(self, monkeypatch, capsys, sample_catalog_path):
        self.run(monkeypatch, "--catalog", sample_catalog_path, "playlist",
                 "--sadness", "0.8", "--length", "3", "--seed", "3")
        out = capsys.readouterr().out
        assert out.count("Score:") == 3

    def test_couple(self, monkeypatch, capsys, tmp_path, sample_catalog_path):
        profile_a = tmp_path / "a.json"
        profile_b = tmp_path / "b.json"
        profile_a.write_text(json.dumps({"emotions": {"joy": 0.8}}))
        profile_b.write_text(json.dumps({"emotions": {"trust": 0.9}}))
        self.run(monkeypatch, "--catalog", sample_catalog_path, "couple",
                 "--profile-a", str(profile_a), "--profile-b", str(profile_b),
                 "--name-a", "Ana", "--name-b", "Ben", "--length", "4")
        out = capsys.readouterr().out
        assert "Connection" in out
        assert out.count("Score:") == 4

    def test_errors_exit_non_zero(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.run(monkeypatch, "target", "--joy", "2.0")
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_missing_command(self, monkeypatch):
        with pytest.raises(SystemExit):
            self.run(monkeypatch)
