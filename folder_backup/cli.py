"""Command-line interface for folder backups."""

import logging
import logging.handlers
import sys
import click
from typing import Optional

from .core.archiver import TreeArchiver
from .core.estimator import SizeEstimator
from .core.orchestrator import BackupOrchestrator
from .config.config_manager import ConfigManager
from .reporters.progress_reporter import ProgressDisplay, DisplayLogHandler
from .utils.formatters import format_file_size, format_kilobytes, format_minutes

logger = logging.getLogger(__name__)


def setup_logging(level: str, log_file: Optional[str] = None, max_size_mb: int = 10,
                  backup_count: int = 5, display: Optional[ProgressDisplay] = None):
    """Set up logging configuration."""
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if display:
        # Warnings and errors are written between progress redraws
        console_handler = DisplayLogHandler(display)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=int(max_size_mb) * 1024 * 1024,
                backupCount=int(backup_count),
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def _load_config(ctx) -> ConfigManager:
    """Load configuration, exiting with a diagnostic when it is unusable."""
    config_manager = ConfigManager(ctx.obj.get('config_path'))
    try:
        config_manager.load_config()
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)
    return config_manager


def _configure_logging(ctx, config_manager: ConfigManager, display: Optional[ProgressDisplay] = None):
    """Apply logging settings, command-line options taking precedence over the config file."""
    logging_config = config_manager.get_logging_config()
    setup_logging(
        ctx.obj.get('log_level') or logging_config.get('level', 'INFO'),
        ctx.obj.get('log_file') or logging_config.get('file'),
        max_size_mb=logging_config.get('max_size_mb', 10),
        backup_count=logging_config.get('backup_count', 5),
        display=display
    )


@click.group()
@click.option('--config', '-c', 'config_path',
              help='Path to configuration file')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level (default: from configuration, else INFO)')
@click.option('--log-file',
              help='Log file path (default: from configuration)')
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: Optional[str], log_file: Optional[str]):
    """Folder Backup - Archive folders and copy them to backup destinations."""

    ctx.ensure_object(dict)

    # Console logging until the configuration is known
    setup_logging(log_level or 'INFO')

    ctx.obj['config_path'] = config_path
    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


@cli.command()
@click.option('--delay', type=click.FloatRange(min=0),
              help='Seconds to pause between phases (overrides configuration)')
@click.option('--progress/--no-progress', default=None,
              help='Show the progress display (overrides configuration)')
@click.pass_context
def run(ctx, delay: Optional[float], progress: Optional[bool]):
    """Back up all configured folders."""
    config_manager = _load_config(ctx)

    if progress is None:
        progress = bool(config_manager.get_display_config().get('progress', True))

    display = ProgressDisplay() if progress else None

    # With the display active, phase messages and log records go through it
    _configure_logging(ctx, config_manager, display=display)

    backup_config = config_manager.get_backup_config()
    if delay is None:
        delay = float(backup_config.get('phase_delay_seconds', 2))

    archiver = TreeArchiver(
        buffer_size=int(backup_config.get('buffer_size', 1024)),
        on_progress=display
    )
    orchestrator = BackupOrchestrator(
        phase_delay=delay,
        archiver=archiver,
        on_phase=display.message if display else None
    )

    units = config_manager.get_backup_units()
    click.echo(f"Starting backup of {len(units)} folder(s)...")

    try:
        summary = orchestrator.run(units)
    except KeyboardInterrupt:
        logger.error("Backup interrupted")
        click.echo("\nBackup interrupted", err=True)
        sys.exit(130)
    except Exception as e:
        logger.exception("Backup failed")
        click.echo(f"Backup failed: {e}", err=True)
        sys.exit(1)

    click.echo("\n✅ Backup completed")
    click.echo(f"  Folders backed up: {len(summary.units)}")
    click.echo(f"  Archived: {format_kilobytes(summary.processed_bytes)} of "
               f"{format_kilobytes(summary.total_bytes)}")
    for result in summary.units:
        click.echo(f"  📦 {result.unit.source} -> {result.backup_folder}")
    click.echo(f"\n🕒 Backup finished in {format_minutes(summary.elapsed)} minute(s)")
    click.echo(click.style("Closing...", fg='yellow'))


@cli.command()
@click.pass_context
def estimate(ctx):
    """Show how much data the configured folders hold."""
    config_manager = _load_config(ctx)
    _configure_logging(ctx, config_manager)

    estimator = SizeEstimator()
    total = 0
    try:
        for unit in config_manager.get_backup_units():
            size = estimator.estimate_folder_size(unit.source)
            total += size
            click.echo(f"📂 {unit.source}: {format_file_size(size)} ({size:,} bytes)")
    except OSError as e:
        click.echo(f"Error estimating backup size: {e}", err=True)
        sys.exit(1)

    click.echo(f"\n💾 Total: {format_file_size(total)} ({total:,} bytes)")


@cli.command()
@click.pass_context
def validate_config(ctx):
    """Validate configuration file."""
    config_manager = _load_config(ctx)

    click.echo("✅ Configuration loaded successfully")

    units = config_manager.get_backup_units()
    backup_config = config_manager.get_backup_config()

    click.echo(f"\n📊 Configuration Summary:")
    click.echo(f"   Backup units: {len(units)}")

    for i, unit in enumerate(units, 1):
        click.echo(f"     {i}. {unit.source} -> {unit.destination} (temp: {unit.temp_folder})")

    click.echo(f"   ⏱️  Phase delay: {backup_config['phase_delay_seconds']}s")
    click.echo(f"   📝 Log file: {config_manager.get_logging_config().get('file') or 'none'}")


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
