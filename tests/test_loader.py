"""Tests for stadiumkit.loader and the resolve_stadiums script."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import resolve_stadiums
from stadiumkit.errors import FormatError
from stadiumkit.loader import load_stadium, load_stadiums


def _write(directory: Path, filename: str, document: object) -> Path:
    path = directory / filename
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def stadium_dir(tmp_path: Path) -> Path:
    _write(tmp_path, "a_small.hbs", {"name": "Small", "width": 300})
    _write(tmp_path, "b_broken.hbs", {"name": "Broken", "segments": [{"v0": 0, "v1": 1}]})
    _write(tmp_path, "c_big.hbs", {"name": "Big", "ballPhysics": None})
    return tmp_path


class TestLoadStadium:

    def test_loads_and_resolves(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "small.hbs", {"name": "Small", "width": 300})
        stadium = load_stadium(path)
        assert stadium.name == "Small"
        assert stadium.width == 300.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Stadium file not found"):
            load_stadium(tmp_path / "nope.hbs")

    def test_unparseable_text(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.hbs"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(FormatError, match="cannot parse bad.hbs"):
            load_stadium(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.hbs"
        path.write_bytes(b'{"name": "\xff"}')
        with pytest.raises(FormatError, match="cannot parse latin.hbs"):
            load_stadium(path)

    def test_custom_parser(self, tmp_path: Path) -> None:
        path = tmp_path / "commented.hbs"
        path.write_text('// Classic\n{"name": "Commented"}', encoding="utf-8")

        def strip_comments(text: str) -> object:
            lines = [ln for ln in text.splitlines() if not ln.lstrip().startswith("//")]
            return json.loads("\n".join(lines))

        assert load_stadium(path, parse=strip_comments).name == "Commented"


class TestLoadStadiums:
    """Tests for loading a whole directory."""

    def test_collects_successes_and_failures(self, stadium_dir: Path) -> None:
        results = load_stadiums(stadium_dir)
        assert [r.path.name for r in results] == ["a_small.hbs", "b_broken.hbs", "c_big.hbs"]
        assert [r.ok for r in results] == [True, False, True]
        assert results[0].stadium is not None
        assert results[0].stadium.name == "Small"
        broken = results[1]
        assert broken.stadium is None
        assert isinstance(broken.error, FormatError)
        assert broken.error.entity == "segments[0]"

    def test_undecodable_file_does_not_stop_the_others(self, tmp_path: Path) -> None:
        _write(tmp_path, "a_good.hbs", {"name": "Good"})
        (tmp_path / "b_bytes.hbs").write_bytes(b'{"name": "\xff"}')
        results = load_stadiums(tmp_path)
        assert len(results) == 2
        assert [r.ok for r in results] == [True, False]
        assert isinstance(results[1].error, FormatError)

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_stadiums(tmp_path / "nowhere")

    def test_not_a_directory(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "file.hbs", {"name": "x"})
        with pytest.raises(NotADirectoryError):
            load_stadiums(path)


class TestResolveStadiumsScript:
    """Tests for the command-line report."""

    def test_reports_each_file(
        self, stadium_dir: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = resolve_stadiums.main([str(stadium_dir)])
        out = capsys.readouterr().out
        assert exit_code == 1
        assert "Successfully read Small" in out
        assert "Successfully read Big" in out
        assert "FAILED b_broken.hbs" in out

    def test_all_good(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _write(tmp_path, "one.hbs", {"name": "One"})
        assert resolve_stadiums.main([str(tmp_path)]) == 0
        assert capsys.readouterr().out.strip() == "Successfully read One"

    def test_missing_directory(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert resolve_stadiums.main([str(tmp_path / "missing")]) == 1
        assert "ERROR" in capsys.readouterr().out
