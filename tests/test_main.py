"""
Tests for the command line.
"""

import pytest

from hexworld.main import main


@pytest.fixture
def settings_file(tmp_path):
    """Settings pointing the store at a temp directory."""
    fp = tmp_path / "hexworld.yaml"
    fp.write_text(f"store_path: {tmp_path / 'worlds'}\n")
    return fp


def _run(settings_file, *args):
    return main(["--settings", str(settings_file), *args])


def _created_id(capsys):
    return capsys.readouterr().out.split("\t")[0]


class TestCli:
    """Subcommands end to end."""

    def test_new_list_show(self, settings_file, capsys):
        """Created maps show up in the list."""
        assert _run(settings_file, "new", "Westmarch", "--radius", "3") == 0
        map_id = _created_id(capsys)
        assert _run(settings_file, "list") == 0
        assert "Westmarch" in capsys.readouterr().out
        assert _run(settings_file, "show", map_id) == 0
        assert "37" in capsys.readouterr().out

    def test_resize_rename_delete(self, settings_file, capsys):
        """Maps can be resized, renamed and deleted."""
        _run(settings_file, "new", "Coast", "--width", "4", "--height", "3")
        map_id = _created_id(capsys)
        assert _run(settings_file, "resize", map_id, "--radius", "2") == 0
        assert "19 tiles" in capsys.readouterr().out
        assert _run(settings_file, "rename", map_id, "Shore") == 0
        assert "Shore" in capsys.readouterr().out
        assert _run(settings_file, "delete", map_id) == 0
        assert _run(settings_file, "show", map_id) == 1

    def test_validation_errors(self, settings_file, capsys):
        """Bad sizes and names are reported, not stored."""
        assert _run(settings_file, "new", "Huge", "--radius", "500") == 2
        assert _run(settings_file, "new", "Half", "--width", "4") == 2
        assert "Validation error" in capsys.readouterr().err

    def test_palette(self, settings_file, capsys):
        """Presets are listed."""
        assert _run(settings_file, "palette") == 0
        assert "Water" in capsys.readouterr().out
