"""
Command-line interface for test-run report summaries.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import ConfigurationError, ReportConfig, load_config, validate_config
from .exceptions import ConsistencyError, RecordLoadError
from .helpers import ReportHelpers
from .loader import load_record
from .reporting import ConsoleReporter, JSONReporter
from .results import summarize_suite

logger = logging.getLogger(__name__)


log_level_option = click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="WARNING",
    help="Logging level",
)


def _configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _load_checked_config(config: Optional[str]) -> ReportConfig:
    report_config = load_config(config)
    errors = validate_config(report_config)
    if errors:
        click.echo("Configuration errors:", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)
    return report_config


@click.group()
def main() -> None:
    """
    Test-run report tools - derived views over a completed run's execution record.

    Examples:

      # Summarize a record on the console
      testrun-report summarize run.json

      # JSON summary written to a file
      testrun-report summarize run.json --report-format json --output summary.json

      # Show when each invocation started and logically finished
      testrun-report timeline run.json --log-level DEBUG
    """


@main.command()
@click.argument("record", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--report-format",
    type=click.Choice(["console", "json"]),
    help="Report format (overrides config)",
)
@click.option(
    "--output",
    type=click.Path(),
    help="Output file for report (default: stdout)",
)
@log_level_option
def summarize(
    record: str,
    config: Optional[str],
    report_format: Optional[str],
    output: Optional[str],
    log_level: str,
) -> None:
    """Summarize pass/fail counts, durations and groups of a RECORD file."""
    _configure_logging(log_level)
    try:
        report_config = _load_checked_config(config)
        if report_format:
            report_config.report_format = report_format

        suite = load_record(record)
        summary = summarize_suite(suite, report_config)

        if report_config.report_format == "json":
            reporter = JSONReporter()
        else:
            reporter = ConsoleReporter(millis_mode=report_config.millis_mode)
        report = reporter.generate(summary)

        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(report)
            click.echo(f"Report written to: {output}")
        else:
            click.echo(report)

        logger.info(
            "Summarized %d tests: %d passed, %d failed, %d skipped",
            summary.total_tests,
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        sys.exit(0 if summary.success else 1)

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except RecordLoadError as e:
        logger.error("Record error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("record", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@log_level_option
def timeline(record: str, config: Optional[str], log_level: str) -> None:
    """List every invocation in RECORD with its resolved end time."""
    _configure_logging(log_level)
    try:
        report_config = _load_checked_config(config)
        suite = load_record(record)
        helpers = ReportHelpers(report_config)

        invocations = suite.invoked_methods
        index = helpers.end_time_index(suite)
        origin = helpers.start_time(invocations)
        for invoked in invocations:
            end = helpers.end_time(suite, invoked, invocations, index)
            click.echo(
                f"+{invoked.timestamp - origin:>8}ms  {invoked.method_id:<50} "
                f"{helpers.format_elapsed(invoked.timestamp, end)}"
            )
    except ConsistencyError as e:
        logger.error("Inconsistent record: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except RecordLoadError as e:
        logger.error("Record error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
