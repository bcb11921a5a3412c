"""Data and configuration commands for Persona Daily CLI.

Handles export and import of the full journal and config file creation.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from personadaily.cli.common import console, get_app, get_settings, print_error, print_success
from personadaily.errors import ExportError, ExportPermissionError, ImportFormatError


@click.command("export")
@click.option(
    "--dir", "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination directory (default: storage.export_dir, ~/Documents).",
)
@click.pass_context
def export_data(ctx: click.Context, directory: Optional[Path]) -> None:
    """Export all entries and stats to a JSON file.

    The file is named persona_data_YYYY-MM-DD.json.

    \b
    Examples:
      personadaily export
      personadaily export --dir ~/backups
    """
    app = get_app(ctx)
    directory = directory or get_settings(ctx).storage.export_dir

    try:
        path = app.export_data(directory.expanduser())
    except ExportPermissionError:
        print_error("Export failed", "Export failed: permission to write files is required.")
        raise SystemExit(1)
    except ExportError as e:
        print_error("Export failed", f"Export failed: {e}")
        raise SystemExit(1)

    print_success("Export", f"Data exported successfully!\nSaved to: {path}")


@click.command("import")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip the overwrite confirmation.")
@click.pass_context
def import_data(ctx: click.Context, file: Path, yes: bool) -> None:
    """Restore entries and stats from an exported JSON file.

    This replaces ALL current data.

    \b
    Examples:
      personadaily import ~/Documents/persona_data_2024-05-01.json
      personadaily import backup.json --yes
    """
    try:
        raw = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error("Import failed", f"Failed to read file: {e}")
        raise SystemExit(1)

    if not yes:
        click.confirm("This will overwrite all current data. Continue?", abort=True)

    app = get_app(ctx)

    try:
        document = app.import_data(raw)
    except ImportFormatError as e:
        print_error("Import failed", f"Import failed: {e}")
        raise SystemExit(1)

    print_success(
        "Import",
        f"Data imported successfully!\n{len(document.all_entries)} entries restored.",
    )


@click.command("init")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.pass_context
def init_config(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      personadaily init
      personadaily --config ./config.toml init --force
    """
    from personadaily.config import create_template_config, get_config_path

    config_path = (ctx.find_root().obj or {}).get("config_path") or get_config_path()

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] {config_path}\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold]Config[/bold]",
            border_style="yellow",
        ))
        return

    path = create_template_config(config_path)
    print_success(
        "Config",
        f"Template config written to {path}\n\n"
        "Set gemini.api_key (or the GEMINI_API_KEY env var) to enable AI stat gains.",
    )
