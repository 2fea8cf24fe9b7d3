#!/usr/bin/env python3
"""
Log Maintenance Commands

CLI commands for the periodic retention job over app_log and audit_log.

    python -m commands.log_maintenance purge --days 7
"""

import click
import logging

from config import get_config
from core.db import get_db_session
from logging_config import configure_logging, get_logger_levels
from services.log_retention import count_expired_logs, purge_expired_logs
from shared.exceptions import TokenLedgerError

_LOG = logging.getLogger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def logs(verbose):
    """Log Maintenance Commands."""
    configure_logging()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@logs.command()
@click.option('--days', type=int, default=None, help='Retention window in days (default: TL_LOG_RETENTION_DAYS)')
@click.option('--dry-run', is_flag=True, help='Show what would be deleted without deleting')
def purge(days, dry_run):
    """Delete log and audit entries older than the retention window."""
    retention_days = days if days is not None else get_config().logging.retention_days
    try:
        if dry_run:
            counts = count_expired_logs(get_db_session, retention_days)
            click.echo(f"DRY RUN - would delete entries older than {retention_days} days:")
        else:
            counts = purge_expired_logs(get_db_session, retention_days)
            click.echo(f"Deleted entries older than {retention_days} days:")
    except TokenLedgerError as e:
        _LOG.error(f"Log purge failed: {e.message}")
        raise click.ClickException(e.message)

    for table, count in counts.items():
        click.echo(f"  {table}: {count}")


@logs.command()
def levels():
    """Show effective process log levels."""
    for name, level in get_logger_levels().items():
        click.echo(f"{name}: {level}")


if __name__ == '__main__':
    logs()
