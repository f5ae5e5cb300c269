"""
Plan Command

Prints the tmux commands that applying a layout would run.
"""
import shlex
import subprocess
from argparse import ArgumentParser, Namespace
from typing import Optional

from ..exceptions import TmuxError
from .base_command import BaseCommand, CommandContext


class PlanCommand(BaseCommand):
    """Command to show a dry-run reconciliation plan"""

    @property
    def name(self) -> str:
        return "plan"

    @property
    def help(self) -> str:
        return "Show the tmux commands needed to apply a layout (dry run)"

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
        try:
            snapshot = context.tmux.get_window_snapshot()
        except (subprocess.CalledProcessError, FileNotFoundError, TmuxError) as e:
            print(f"Could not read the tmux window: {e}")
            return 1

        template = self.choose_template(args, context, snapshot)
        if template is None:
            return 1

        plan = context.tmux.reconciler.plan(snapshot, template)
        match = plan.adjustment.match

        print(f"Layout: {template.name} ({snapshot.width}x{snapshot.height})")
        print(f"Kept panes: {', '.join(str(m.pane_id) for m in match.matches) or 'none'}")
        if match.unmatched_panes:
            print(f"Killed panes: {', '.join(str(p) for p in match.unmatched_panes)}")
        if match.unmatched_slots:
            print(f"New panes: {len(match.unmatched_slots)}")

        print("\nCommands:")
        for command in plan.adjustment.commands:
            args_list = command.to_tmux_args(context.tmux.target, snapshot.pane_indices)
            print(f"  {context.tmux.tmux_bin} {shlex.join(args_list)}")
        for command in plan.arrangement.commands:
            args_list = command.to_tmux_args(context.tmux.target, plan.predicted_snapshot.pane_indices)
            print(f"  {context.tmux.tmux_bin} {shlex.join(args_list)}")
        return 0
