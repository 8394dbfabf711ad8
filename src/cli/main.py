"""Main CLI entry point for translation-sync command.

This module provides the Typer application that serves as the entry point
for the translation-sync command-line tool, with push, pull and init
subcommands.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.catalog.config_loader import ConfigLoader
from src.catalog.models import SheetSyncConfig
from src.sheets_client.errors import SyncError
from src.cli.errors import InitError
from src.cli.failures import report_failure
from src.cli.init_command import InitCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.pull_command import PullCommand
from src.cli.push_command import PushCommand

VERSION = "0.1.0"

app = typer.Typer(
    name="translation-sync",
    help="""Sync translation catalogs with a Google Sheets spreadsheet.

QUICK START:
  translation-sync init                  # Write .translation-sync/config.yaml
  translation-sync push en               # Catalog → sheet (keeps translator edits)
  translation-sync pull en --dry-run     # Preview sheet → catalog
  translation-sync pull en               # Sheet → catalog""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

CONFIG_OPTION_HELP = "Path to the configuration file"
LOGDIR_OPTION_HELP = "Directory for log files (creates timestamped log file)"
VERBOSITY_OPTION_HELP = "Verbosity level: 0=summary, 1=info, 2=debug"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"translation-sync_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _load_config(config_path: str, action: str, output: OutputHandler) -> SheetSyncConfig:
    """Load the configuration or exit with GENERAL_ERROR."""
    logger.info(f"Loading configuration from {config_path}")
    try:
        return ConfigLoader.load(config_path)
    except SyncError as e:
        report = report_failure(e, action, output)
        raise typer.Exit(report.exit_code)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"translation-sync version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Sync translation catalogs with a Google Sheets spreadsheet."""


@app.command()
def push(
    lang: str = typer.Argument("en", help="Language directory to push (under lang_path)"),
    clear: bool = typer.Option(
        False,
        "--clear",
        help="Clear existing sheet data before pushing (implies --force-initial)",
    ),
    force_initial: bool = typer.Option(
        False,
        "--force-initial",
        help="Rebuild the sheet from the catalog, discarding Updated Value edits",
    ),
    no_backup: bool = typer.Option(
        False,
        "--no-backup",
        help="Do not create a backup sheet before pushing",
    ),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help=CONFIG_OPTION_HELP,
    ),
    logdir: Optional[str] = typer.Option(None, "--logdir", help=LOGDIR_OPTION_HELP),
    verbosity: int = typer.Option(0, "--verbosity", "-v", help=VERBOSITY_OPTION_HELP),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Push the local catalog to the translation sheet."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    config = _load_config(config_path, "Push", output)

    push_cmd = PushCommand(config, output_handler=output)
    report = push_cmd.run(
        lang=lang,
        clear=clear,
        force_initial=force_initial,
        no_backup=no_backup,
    )
    raise typer.Exit(report.exit_code)


@app.command()
def pull(
    lang: str = typer.Argument("en", help="Language directory to write (under lang_path)"),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Preview the translations that would be written",
    ),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help=CONFIG_OPTION_HELP,
    ),
    logdir: Optional[str] = typer.Option(None, "--logdir", help=LOGDIR_OPTION_HELP),
    verbosity: int = typer.Option(0, "--verbosity", "-v", help=VERBOSITY_OPTION_HELP),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Pull translations from the sheet into the local catalog."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    config = _load_config(config_path, "Pull", output)

    pull_cmd = PullCommand(config, output_handler=output)
    report = pull_cmd.run(lang=lang, dry_run=dry_run)
    raise typer.Exit(report.exit_code)


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing configuration file"),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help=CONFIG_OPTION_HELP,
    ),
    verbosity: int = typer.Option(0, "--verbosity", "-v", help=VERBOSITY_OPTION_HELP),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Write the default configuration file."""
    _configure_logging(verbosity)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        init_cmd = InitCommand(config_path=config_path)
        written_path = init_cmd.run(force=force)
    except InitError as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except Exception as e:
        logger.exception("Unexpected error during initialization")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.success(f"Configuration written to {written_path}")

    config = SheetSyncConfig()
    email = InitCommand.service_account_email(config.credentials_path)
    output.print("")
    output.print("Next steps:")
    output.print(f"  1. Set spreadsheet_id in {written_path} (or GOOGLE_SHEETS_SPREADSHEET_ID)")
    output.print(f"  2. Place the service account key at {config.credentials_path}")
    if email:
        output.print(f"  3. Share the spreadsheet with {email}")
    else:
        output.print("  3. Share the spreadsheet with the service account email")
    output.print("  4. Run 'translation-sync push' to publish your catalog")

    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


if __name__ == "__main__":
    main()
