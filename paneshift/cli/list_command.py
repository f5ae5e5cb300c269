"""
List Command

Shows the available layout templates.
"""
from argparse import ArgumentParser, Namespace

from ..layouts import minimum_window_size
from .base_command import BaseCommand, CommandContext


class ListCommand(BaseCommand):
    """Command to list layout templates"""

    @property
    def name(self) -> str:
        return "list"

    @property
    def help(self) -> str:
        return "List available layouts"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--count", "-n",
            type=int,
            help="Only show layouts with this many panes"
        )

    def execute(self, args: Namespace, context: CommandContext) -> int:
        templates = context.catalog.for_count(args.count) if args.count else list(context.catalog)
        if not templates:
            print("No layouts found")
            return 1

        print(f"{'PANES':<6} {'MIN SIZE':<9} NAME")
        for template in templates:
            min_width, min_height = minimum_window_size(template)
            print(f"{template.pane_count:<6} {f'{min_width}x{min_height}':<9} {template.name}")
        return 0
