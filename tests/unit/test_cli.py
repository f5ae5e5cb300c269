"""
Unit tests for the paneshift command line
"""
from argparse import ArgumentParser, Namespace
from unittest.mock import patch

import pytest

from paneshift.catalog_loader import LayoutCatalogLoader
from paneshift.cli.command_registry import CommandRegistry
from paneshift.main import main
from paneshift.models import Pane, WindowSnapshot
from paneshift.tmux_manager import TmuxManager

ONE_PANE = WindowSnapshot(80, 24, (Pane("%0", 0, 0, 80, 24),))
TWO_PANES = WindowSnapshot(80, 24, (Pane("%0", 0, 0, 40, 24), Pane("%1", 41, 0, 39, 24)))


@pytest.fixture(autouse=True)
def no_user_config():
    """Keep the user's own layout file out of the tests"""
    with patch.object(LayoutCatalogLoader, 'find_config_file', return_value=None):
        yield


class TestCommandRegistry:

    def test_commands_registered(self):
        registry = CommandRegistry()
        assert sorted(registry.commands) == ["apply", "list", "plan", "preview"]
        assert registry.aliases["ls"] == "list"
        assert registry.get_command("plan").name == "plan"
        assert registry.get_command("missing") is None

    def test_alias_resolves_to_command(self):
        registry = CommandRegistry()
        assert registry.get_command("ls") is registry.commands["list"]
        assert registry.aliases_for("list") == ["ls"]
        assert registry.aliases_for("apply") == []

        parser = ArgumentParser()
        registry.setup_parser(parser)
        args = parser.parse_args(["ls", "-n", "2"])
        assert args.command == "ls"
        assert args.count == 2

    def test_unknown_command(self, capsys):
        registry = CommandRegistry()
        assert registry.execute_command(Namespace(command="remove"), context=None) == 1
        assert "Unknown command: 'remove'" in capsys.readouterr().out


class TestMain:

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_list(self, capsys):
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0].split() == ["PANES", "MIN", "SIZE", "NAME"]
        assert "both stacked" in out

    def test_list_by_count_via_alias(self, capsys):
        assert main(["ls", "--count", "2"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[1].split() == ["2", "3x1", "50/50"]

    def test_list_unsupported_count(self, capsys):
        assert main(["list", "-n", "9"]) == 1
        assert "No layouts found" in capsys.readouterr().out

    def test_preview(self, capsys):
        assert main(["preview", "full", "--width", "80", "--height", "24"]) == 0
        out = capsys.readouterr().out
        assert "Layout: full (80x24)" in out
        assert "pane 0: 80x24 at 0,0" in out
        assert out.strip().endswith("b25d,80x24,0,0,0")

    def test_preview_stacked(self, capsys):
        assert main(["preview", "left + right stacked", "-W", "80", "-H", "24"]) == 0
        out = capsys.readouterr().out
        assert "pane 2: 40x12 at 40,12" in out
        assert "{39x24,0,0,0,40x24,40,0[40x11,40,0,1,40x12,40,12,2]}" in out

    def test_preview_unknown_layout(self, capsys):
        assert main(["preview", "nope"]) == 1
        assert "Unknown layout" in capsys.readouterr().out

    def test_preview_invalid_size(self, capsys):
        assert main(["preview", "full", "--width", "0"]) == 1
        assert "--width must be positive" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml"), "list"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_invalid_default_layout(self, tmp_path, capsys):
        config_file = tmp_path / "layouts.yaml"
        config_file.write_text("settings:\n  default_layout: nope\n")

        assert main(["--config", str(config_file), "list"]) == 1
        assert "Config error" in capsys.readouterr().out

    def test_custom_layout_listed(self, tmp_path, capsys):
        config_file = tmp_path / "layouts.yaml"
        config_file.write_text(
            "layouts:\n"
            "  - name: solo\n"
            "    panes:\n"
            "      - {x: 0, y: 0, width: 1, height: 1}\n"
        )

        assert main(["-c", str(config_file), "list", "-n", "1"]) == 0
        assert "solo" in capsys.readouterr().out


class TestPlanCommand:

    def test_plan_grow(self, capsys):
        with patch.object(TmuxManager, 'get_window_snapshot', return_value=ONE_PANE):
            assert main(["plan", "left + right stacked"]) == 0

        out = capsys.readouterr().out
        assert "Kept panes: %0" in out
        assert "New panes: 2" in out
        assert out.count("tmux split-window") == 2
        assert "tmux select-layout" in out

    def test_plan_with_target(self, capsys):
        with patch.object(TmuxManager, 'get_window_snapshot', return_value=TWO_PANES):
            assert main(["--target", "dev:3", "plan", "full"]) == 0

        out = capsys.readouterr().out
        assert "Killed panes: %1" in out
        assert "tmux kill-pane -t %1" in out
        assert "tmux select-layout -t dev:3 b25d,80x24,0,0,0" in out

    def test_plan_picks_layout_for_count(self, capsys):
        with patch.object(TmuxManager, 'get_window_snapshot', return_value=TWO_PANES):
            assert main(["plan"]) == 0
        assert "Layout: 50/50 (80x24)" in capsys.readouterr().out

    def test_plan_layout_and_count(self, capsys):
        assert main(["plan", "full", "--count", "2"]) == 1
        assert "not both" in capsys.readouterr().out

    def test_plan_without_tmux(self, capsys):
        with patch.object(TmuxManager, 'get_window_snapshot', side_effect=FileNotFoundError("tmux")):
            assert main(["plan", "full"]) == 1
        assert "Could not read the tmux window" in capsys.readouterr().out


class TestApplyCommand:

    def test_not_inside_tmux(self, capsys):
        with patch.object(TmuxManager, 'is_inside_tmux', return_value=False):
            assert main(["apply", "full"]) == 1
        assert "Not inside tmux" in capsys.readouterr().out

    def test_apply(self, capsys):
        with patch.object(TmuxManager, 'is_inside_tmux', return_value=True), \
                patch.object(TmuxManager, 'get_window_snapshot', return_value=TWO_PANES), \
                patch.object(TmuxManager, 'apply_template', return_value=True) as mock_apply:
            assert main(["apply"]) == 0

        assert mock_apply.call_args[0][0].name == "50/50"
        assert "Applied layout '50/50'" in capsys.readouterr().out

    def test_apply_count_with_target(self, capsys):
        with patch.object(TmuxManager, 'get_window_snapshot', return_value=ONE_PANE), \
                patch.object(TmuxManager, 'apply_template', return_value=True) as mock_apply:
            assert main(["-t", "dev:1", "apply", "--count", "4"]) == 0

        assert mock_apply.call_args[0][0].pane_count == 4

    def test_apply_failure(self, capsys):
        with patch.object(TmuxManager, 'is_inside_tmux', return_value=True), \
                patch.object(TmuxManager, 'get_window_snapshot', return_value=ONE_PANE), \
                patch.object(TmuxManager, 'apply_template', return_value=False):
            assert main(["apply", "both stacked"]) == 1

        assert "Failed to apply layout 'both stacked'" in capsys.readouterr().out
