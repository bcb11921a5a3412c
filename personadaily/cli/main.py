"""Main CLI entry point for Persona Daily.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        # Commands are found by click name, which may differ from the attribute name
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "home": "personadaily.cli.home",
    "stats": "personadaily.cli.home",
    "add": "personadaily.cli.add",
    "calendar": "personadaily.cli.calendar_view",
    "export": "personadaily.cli.settings",
    "import": "personadaily.cli.settings",
    "init": "personadaily.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool) -> None:
    """Route package logs to stderr through rich.

    Args:
        verbose: Show debug messages instead of warnings and errors only.
    """
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("personadaily")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="personadaily")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/personadaily/config.toml).",
)
@click.option(
    "--db", "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the SQLite database (overrides the config).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logs.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    db_path: Optional[Path],
    verbose: bool,
) -> None:
    """Persona Daily - level up your five stats one day at a time.

    Log what you did and how it felt; an AI rates how much it raised your
    Diligence, Knowledge, Courage, Understanding and Expression.

    \b
    Quick Start:
      personadaily init                         # Create a config file
      personadaily add "read a book" "learned a lot"
      personadaily stats                        # View levels
      personadaily calendar                     # Browse entries by date
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["db_path"] = db_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
