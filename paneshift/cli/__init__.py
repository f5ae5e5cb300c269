"""Command line interface for paneshift"""

from .base_command import BaseCommand, CommandContext
from .command_registry import CommandRegistry

__all__ = ["BaseCommand", "CommandContext", "CommandRegistry"]
