# === FILE: linkmap/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for linkmap.

Commands:
  crawl ENTRYPOINT   Map the links reachable from ENTRYPOINT and print the tree
  config             Show the effective configuration

Global options:
  --config PATH       YAML/JSON settings file (optional)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Log line format

crawl options:
  --depth, -depth INT     Link-following hops beyond the entrypoint (default 1)
  --rate, -rate FLOAT     Maximum requests per second (default 10)
  --timeout SEC           Per-request timeout
  --user-agent TEXT       User-Agent header
  --best-effort           Keep failed branches as leaves instead of failing the run
  --json PATH             Also write the tree as JSON
  --run-timeout SEC       Give up on the whole crawl after SEC seconds

Example:
  linkmap crawl https://example.com/ -depth 3 -rate 5
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from linkmap import __version__
from linkmap.config import load_config
from linkmap.engine import start_crawl
from linkmap.errors import LinkmapError
from linkmap.logger import DEFAULT_FORMAT, configure
from linkmap.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='linkmap, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML or JSON settings file.'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help='Logging level (overrides the settings file).'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if omitted).'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Log line format.'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """linkmap: map the link tree of a website."""
    try:
        cfg = load_config(config_path)
    except (OSError, LinkmapError, ValidationError) as e:
        print_error(f'Error loading configuration: {e}')
    configure(
        level=(log_level or cfg.log_level).upper(),
        log_file=log_file,
        log_format=log_format,
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('entrypoint')
@click.option(
    '--depth', '-depth', 'depth',
    type=click.IntRange(min=0),
    default=None,
    help='Link-following hops beyond the entrypoint [default: 1]'
)
@click.option(
    '--rate', '-rate', 'rate',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Maximum requests per second [default: 10]'
)
@click.option(
    '--timeout', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Per-request timeout in seconds [default: 10]'
)
@click.option('--user-agent', 'user_agent', default=None, help='User-Agent header.')
@click.option(
    '--best-effort', is_flag=True,
    help='Keep failed branches as leaves instead of failing the whole crawl.'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also write the tree as JSON to this file.'
)
@click.option(
    '--run-timeout', 'run_timeout',
    type=float,
    default=None,
    help='Timeout for the whole crawl (seconds).'
)
@click.pass_context
def crawl(ctx, entrypoint, depth, rate, timeout, user_agent, best_effort, json_output, run_timeout):
    """Crawl ENTRYPOINT and print the tree of links found."""
    try:
        cfg = load_config(
            ctx.obj['config_path'],
            max_depth=depth,
            rate_limit=rate,
            timeout=timeout,
            user_agent=user_agent,
            fail_fast=False if best_effort else None,
        )
    except (OSError, LinkmapError, ValidationError) as e:
        print_error(f'Error loading configuration: {e}')

    try:
        if run_timeout:
            tree = asyncio.run(
                asyncio.wait_for(start_crawl(entrypoint, cfg), timeout=run_timeout)
            )
        else:
            tree = asyncio.run(start_crawl(entrypoint, cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {run_timeout} seconds')
    except LinkmapError as e:
        print_error(str(e))

    click.echo(f'Links found on {entrypoint}:')
    click.echo(tree.render(), nl=False)

    if json_output:
        try:
            saved = render_json(entrypoint, tree, json_output)
        except OSError as e:
            print_error(f'Error writing JSON report: {e}')
        click.echo(f'JSON report: {saved}', err=True)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
