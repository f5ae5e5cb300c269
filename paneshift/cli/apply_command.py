"""
Apply Command

Rearranges the current tmux window into a layout.
"""
import subprocess
from argparse import ArgumentParser, Namespace
from typing import Optional

from ..exceptions import TmuxError
from .base_command import BaseCommand, CommandContext


class ApplyCommand(BaseCommand):
    """Command to apply a layout to a tmux window"""

    @property
    def name(self) -> str:
        return "apply"

    @property
    def help(self) -> str:
        return "Apply a layout to the tmux window"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "layout",
            nargs="?",
            help="Name of the layout (default: picked for the pane count)"
        )
        parser.add_argument(
            "--count", "-n",
            type=int,
            help="Pick a layout for this many panes instead of naming one"
        )

    def validate_args(self, args: Namespace) -> Optional[str]:
        if args.layout and args.count is not None:
            return "Give either a layout name or --count, not both"
        return None

    def execute(self, args: Namespace, context: CommandContext) -> int:
        if not context.tmux.target and not context.tmux.is_inside_tmux():
            print("Not inside tmux; use --target to pick a window")
            return 1

        try:
            snapshot = context.tmux.get_window_snapshot()
        except (subprocess.CalledProcessError, FileNotFoundError, TmuxError) as e:
            print(f"Could not read the tmux window: {e}")
            return 1

        template = self.choose_template(args, context, snapshot)
        if template is None:
            return 1

        if not context.tmux.apply_template(template):
            print(f"Failed to apply layout '{template.name}'")
            return 1

        print(f"Applied layout '{template.name}'")
        return 0
