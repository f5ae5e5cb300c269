"""
Preview Command

Resolves a layout for a window size and prints its geometry and layout
string without touching tmux.
"""
from argparse import ArgumentParser, Namespace
from typing import Optional

from ..layout_codec import generate_layout_string
from ..layouts import resolve_layout
from ..models import Pane
from .base_command import BaseCommand, CommandContext


class PreviewCommand(BaseCommand):
    """Command to preview a resolved layout"""

    @property
    def name(self) -> str:
        return "preview"

    @property
    def help(self) -> str:
        return "Show the pane geometry and layout string of a layout"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "layout",
            help="Name of the layout"
        )
        parser.add_argument(
            "--width", "-W",
            type=int,
            help="Window width in cells (default: terminal width)"
        )
        parser.add_argument(
            "--height", "-H",
            type=int,
            help="Window height in cells (default: terminal height)"
        )

    def validate_args(self, args: Namespace) -> Optional[str]:
        for dimension in ("width", "height"):
            value = getattr(args, dimension)
            if value is not None and value < 1:
                return f"--{dimension} must be positive"
        return None

    def execute(self, args: Namespace, context: CommandContext) -> int:
        template = context.catalog.get(args.layout)
        if template is None:
            print(f"Unknown layout: '{args.layout}' (see 'paneshift list')")
            return 1

        term_width, term_height = context.detection.get_terminal_size()
        width = args.width or term_width
        height = args.height or term_height

        rects = resolve_layout(template, width, height)
        print(f"Layout: {template.name} ({width}x{height})")
        for i, rect in enumerate(rects):
            print(f"  pane {i}: {rect.width}x{rect.height} at {rect.x},{rect.y}")

        panes = [Pane.from_rect(i, rect) for i, rect in enumerate(rects)]
        print(generate_layout_string(panes, width, height))
        return 0
