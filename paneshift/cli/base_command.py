"""
Base Command Class

Provides the foundation for all paneshift CLI commands.
"""
from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from dataclasses import dataclass
from typing import Optional

from ..catalog_loader import LayoutCatalog
from ..config import PaneshiftConfig
from ..models import LayoutTemplate, WindowSnapshot
from ..services.layout_detection_service import LayoutDetectionService
from ..tmux_manager import TmuxManager


@dataclass
class CommandContext:
    """Everything a command needs besides its arguments"""
    config: PaneshiftConfig
    catalog: LayoutCatalog
    tmux: TmuxManager
    detection: LayoutDetectionService


class BaseCommand(ABC):
    """Abstract base class for CLI commands"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name used in CLI"""
        pass

    @property
    @abstractmethod
    def help(self) -> str:
        """Help text for the command"""
        pass

    @abstractmethod
    def add_arguments(self, parser: ArgumentParser) -> None:
        """
        Add command-specific arguments to the parser.

        Args:
            parser: ArgumentParser instance to add arguments to
        """
        pass

    @abstractmethod
    def execute(self, args: Namespace, context: CommandContext) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command line arguments
            context: Shared configuration, catalog and tmux access

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        pass

    def validate_args(self, args: Namespace) -> Optional[str]:
        """
        Validate command arguments.

        Args:
            args: Parsed arguments

        Returns:
            Error message if validation fails, None if valid
        """
        return None

    def choose_template(self, args: Namespace, context: CommandContext,
                        snapshot: Optional[WindowSnapshot] = None) -> Optional[LayoutTemplate]:
        """Template named on the command line, else one picked for the pane count

        Prints a message and returns None when nothing suitable exists.
        """
        layout_name = getattr(args, "layout", None) or context.config.default_layout
        count = getattr(args, "count", None)

        if layout_name and count is None:
            template = context.catalog.get(layout_name)
            if template is None:
                print(f"Unknown layout: '{layout_name}' (see 'paneshift list')")
            return template

        if count is None:
            count = len(snapshot.panes) if snapshot else 1

        if snapshot:
            template = context.detection.select_layout(count, snapshot.width, snapshot.height)
        else:
            template = context.detection.select_layout(count)
        if template is None:
            print(f"No layout available for {count} panes")
        return template
