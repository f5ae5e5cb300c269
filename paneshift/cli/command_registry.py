"""
Command Registry

Maps subcommand names and their short aliases to command objects.
"""
from argparse import ArgumentParser, Namespace
from typing import Dict, List, Optional

from .apply_command import ApplyCommand
from .base_command import BaseCommand, CommandContext
from .list_command import ListCommand
from .plan_command import PlanCommand
from .preview_command import PreviewCommand

# Listed in the order they appear in --help
COMMAND_CLASSES = (ListCommand, PreviewCommand, PlanCommand, ApplyCommand)

ALIASES = {"ls": "list"}


class CommandRegistry:
    """Registry for all available commands"""

    def __init__(self):
        self.commands: Dict[str, BaseCommand] = {}
        for cmd_class in COMMAND_CLASSES:
            cmd = cmd_class()
            self.commands[cmd.name] = cmd
        self.aliases: Dict[str, str] = {
            alias: target for alias, target in ALIASES.items() if target in self.commands
        }

    def aliases_for(self, name: str) -> List[str]:
        return [alias for alias, target in self.aliases.items() if target == name]

    def setup_parser(self, parser: ArgumentParser) -> None:
        """Add one subparser per command, aliases included"""
        subparsers = parser.add_subparsers(dest="command", help="Available commands")
        for name, cmd in self.commands.items():
            subparser = subparsers.add_parser(name, aliases=self.aliases_for(name), help=cmd.help)
            cmd.add_arguments(subparser)

    def get_command(self, name: str) -> Optional[BaseCommand]:
        """Get a command by name or alias"""
        return self.commands.get(self.aliases.get(name, name))

    def execute_command(self, args: Namespace, context: CommandContext) -> int:
        """Validate and run the command named by args.command"""
        cmd = self.get_command(args.command)
        if cmd is None:
            print(f"Unknown command: '{args.command}'")
            return 1

        error = cmd.validate_args(args)
        if error:
            print(f"Error: {error}")
            return 1

        return cmd.execute(args, context)
