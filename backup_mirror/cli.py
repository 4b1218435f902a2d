"""Command-line interface for backup mirror."""

import logging
import sys
import time
import click
from typing import Optional

from .core.mirror import BackupMirror
from .core.models import MirrorConfig
from .core.verifications import log_summary
from .config.config_manager import ConfigManager
from .config.config_validator import ConfigValidator, RootNestingError
from .utils.formatters import format_duration


LEVEL_COLORS = {
    logging.DEBUG: 'yellow',
    logging.INFO: 'green',
    logging.WARNING: 'bright_yellow',
    logging.ERROR: 'red',
    logging.CRITICAL: 'red',
}


class LevelColorFormatter(logging.Formatter):
    """Colors console lines by log level. Unknown levels are left uncolored."""

    def format(self, record):
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return message
        return click.style(message, fg=color)


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration."""
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    # Set up root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(LevelColorFormatter('%(message)s'))
    root_logger.addHandler(console_handler)

    # Add file handler if specified
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def root_options(func):
    """Options shared by the commands that need a source and a target."""
    options = [
        click.option('--source', '-s', help='Sets the source directory'),
        click.option('--target', '-t', help='Sets the target directory'),
        click.option('--debug', '-d', is_flag=True, help='Show additional output'),
        click.option('--max-passes', type=click.IntRange(min=1),
                     help='Stop verifying after this many passes'),
        click.option('--repair-overwrite/--no-repair-overwrite', default=None,
                     help='Replace target files that differ in length when repairing'),
        click.option('--summary', is_flag=True,
                     help='Log file counts and sizes after verification'),
        click.option('--pause/--no-pause', default=False,
                     help='Wait for a key press before exiting'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option('--config', '-c', 'config_path',
              help='Path to configuration file')
@click.option('--log-level',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--log-file',
              help='Log file path')
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: Optional[str], log_file: Optional[str]):
    """Backup Mirror - Copy a directory to a target and verify the copy."""

    # Ensure context exists
    ctx.ensure_object(dict)

    ctx.obj['config_path'] = config_path
    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


def _load_config(ctx) -> ConfigManager:
    """Load the stored configuration and set up logging from it."""
    config_manager = ConfigManager(ctx.obj.get('config_path'))
    try:
        config_manager.load_config()
    except ValueError as e:
        setup_logging(ctx.obj.get('log_level') or 'INFO', ctx.obj.get('log_file'))
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    logging_config = config_manager.get_logging_config()
    setup_logging(
        ctx.obj.get('log_level') or logging_config.get('level', 'INFO'),
        ctx.obj.get('log_file') or logging_config.get('file')
    )
    return config_manager


def _build_mirror(config_manager: ConfigManager, source: Optional[str], target: Optional[str],
                  debug: bool, max_passes: Optional[int],
                  repair_overwrite: Optional[bool]) -> BackupMirror:
    """Resolve the source/target pair and create the BackupMirror."""
    logger = logging.getLogger(__name__)

    if config_manager.source is not None:
        logger.info("Loaded source from config")
    if config_manager.target is not None:
        logger.info("Loaded target from config")

    validator = ConfigValidator()
    if source:
        source = validator.validate_directory(source)
        if config_manager.source is not None and debug:
            logger.warning("Overloaded source")
        config_manager.source = source
    if target:
        target = validator.validate_directory(target, test_write=True)
        if config_manager.target is not None and debug:
            logger.warning("Overloaded target")
        config_manager.target = target

    verification_config = config_manager.get_verification_config()
    config = MirrorConfig(
        source=config_manager.source,
        target=config_manager.target,
        debug=debug,
        max_passes=max_passes or verification_config.get('max_passes'),
        repair_overwrite=(repair_overwrite if repair_overwrite is not None
                          else verification_config.get('repair_overwrite', False))
    )

    try:
        return BackupMirror(config)
    except RootNestingError:
        config_manager.clear_roots()
        raise


def _run(ctx, verify_only: bool, overwrite: bool, source: Optional[str], target: Optional[str],
         debug: bool, max_passes: Optional[int], repair_overwrite: Optional[bool],
         summary: bool, pause: bool):
    """Run the backup and verification."""
    if debug:
        ctx.obj['log_level'] = 'DEBUG'
    config_manager = _load_config(ctx)

    try:
        mirror = _build_mirror(config_manager, source, target, debug, max_passes, repair_overwrite)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if summary:
        mirror.add_verification(log_summary)

    started = time.monotonic()
    if verify_only:
        click.echo("Skipping Backup...")
    else:
        mirror.start_backup(overwrite)
    result = mirror.verify()

    click.echo(f"\nFinished in {format_duration(time.monotonic() - started)} "
               f"after {result.passes} verification pass(es)")

    if pause:
        click.pause("Press any key to exit")

    if not result.clean:
        sys.exit(2)


@cli.command()
@root_options
@click.option('--verify-only', '-v', is_flag=True, help='Only run the verification')
@click.option('--overwrite', is_flag=True, help='Replace files that already exist in the target')
@click.pass_context
def run(ctx, verify_only: bool, overwrite: bool, **options):
    """Copy all files from source to target and verify the copy."""
    _run(ctx, verify_only, overwrite, **options)


@cli.command()
@root_options
@click.pass_context
def verify(ctx, **options):
    """Verify the target against the source and repair lost files."""
    _run(ctx, True, False, **options)


@cli.command()
@click.pass_context
def show_config(ctx):
    """Show the stored directories and verification settings."""
    config_manager = _load_config(ctx)

    verification_config = config_manager.get_verification_config()
    max_passes = verification_config.get('max_passes')

    click.echo(f"Configuration file: {config_manager.config_file}")
    click.echo(f"   Source: {config_manager.source or 'Not set'}")
    click.echo(f"   Target: {config_manager.target or 'Not set'}")
    click.echo(f"   Max passes: {max_passes if max_passes is not None else 'unlimited'}")
    click.echo(f"   Repair overwrite: {verification_config.get('repair_overwrite', False)}")


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
