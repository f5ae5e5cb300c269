"""
Main entry point for the paneshift CLI
"""

import argparse
import logging
import sys
from pathlib import Path

from .catalog_loader import LayoutCatalog, LayoutCatalogLoader
from .cli.base_command import CommandContext
from .cli.command_registry import CommandRegistry
from .reconciler import LayoutReconciler
from .services.layout_detection_service import LayoutDetectionService
from .tmux_manager import TmuxManager


def build_parser(registry: CommandRegistry) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paneshift",
        description="Rearrange tmux panes into layouts without restarting them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the built-in and configured layouts
  paneshift list

  # Preview a layout at 120x40
  paneshift preview "left + right stacked" --width 120 --height 40

  # Show what applying a layout would do, then do it
  paneshift plan "both stacked"
  paneshift apply "both stacked"
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=Path,
        default=None,
        help='Layout config file (default: search ~/.config/paneshift and ./layouts)'
    )

    parser.add_argument(
        '--target', '-t',
        default=None,
        help='tmux window target (default: current window)'
    )

    parser.add_argument(
        '--log-level', '-l',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    registry.setup_parser(parser)
    return parser


def main(argv=None) -> int:
    """Main CLI entry point"""
    registry = CommandRegistry()
    parser = build_parser(registry)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    loader = LayoutCatalogLoader()
    try:
        config = loader.load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    errors = loader.validate_config(config)
    if errors:
        for error in errors:
            print(f"Config error: {error}")
        return 1

    if args.target:
        config.target = args.target

    catalog = LayoutCatalog(config.custom_layouts)
    context = CommandContext(
        config=config,
        catalog=catalog,
        tmux=TmuxManager(
            target=config.target,
            tmux_bin=config.tmux_bin,
            reconciler=LayoutReconciler(),
            inherit_cwd=config.inherit_cwd,
        ),
        detection=LayoutDetectionService(catalog),
    )

    return registry.execute_command(args, context)


if __name__ == '__main__':
    sys.exit(main())
