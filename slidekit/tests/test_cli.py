"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main


@pytest.fixture
def deck_file(tmp_path, quiz_collection):
    path = tmp_path / "deck.json"
    path.write_text(json.dumps({"title": "Quiz", "slides": quiz_collection}), encoding="utf-8")
    return path


class TestCLI:
    """Tests for the slidekit command."""

    def test_score(self, deck_file, capsys):
        assert main(["score", str(deck_file)]) == 0
        out = capsys.readouterr().out
        assert "Elements: 4" in out
        assert "Total score: 5" in out
        assert "Current score: 0 (0%)" in out

    def test_render(self, deck_file, capsys):
        assert main(["render", str(deck_file), "--slide", "1"]) == 0
        nodes = json.loads(capsys.readouterr().out)
        assert nodes[0]["type"] == "Box"

    def test_render_with_restricted_types(self, deck_file, capsys):
        assert main(["render", str(deck_file), "--types", "RadioGroup"]) == 0
        captured = capsys.readouterr()
        nodes = json.loads(captured.out)
        assert nodes[0]["type"] == "RadioGroup"
        assert nodes[1] is None
        assert "CheckboxGroup" in captured.err

    def test_validate(self, deck_file, capsys):
        assert main(["validate", str(deck_file)]) == 0
        assert "Deck is valid" in capsys.readouterr().out

    def test_validate_reports_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([[{"type": "A", "props": {"score": -1}}]]), encoding="utf-8")
        assert main(["validate", str(path)]) == 1
        assert "score must be >= 0" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["score", str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(path)])
        assert exc_info.value.code == 1

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
