#!/usr/bin/env python3
"""
Vibesana - AI Task Breakdown

Break a free-text project description into a prioritized list of actionable tasks
using a hosted LLM, from the command line or as an HTTP service.
"""

import asyncio
import json
import logging
import os
import sys

import click

from vibesana.breakdown_service import TaskBreakdownService
from vibesana.config import Config
from vibesana.exceptions import TaskBreakdownError
from vibesana.logging_setup import setup_logging
from vibesana.models import BreakdownResult


def print_breakdown(result: BreakdownResult):
    """Print generated tasks as a numbered list"""
    click.echo(f"\n{len(result.tasks)} tasks ({result.parse_status.value}, {result.duration_ms}ms):\n")
    for index, task in enumerate(result.tasks, start=1):
        click.echo(f"{index:>2}. [{task.priority.upper():<6}] {task.title}")
        if task.description:
            click.echo(f"    {task.description}")
    if result.usage:
        click.echo(f"\nTokens: prompt={result.usage.prompt_tokens}, completion={result.usage.completion_tokens}")


@click.group()
@click.option('--config', '-c', default='config.yaml', help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Vibesana - AI Task Breakdown"""
    setup_logging(verbose)

    # Load configuration
    try:
        config_obj = Config(config)
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if not verbose:
        setup_logging(level=config_obj.get_log_level())

    ctx.obj = config_obj


@cli.command()
@click.argument('description')
@click.option('--json', 'as_json', is_flag=True, help='Print the response body as JSON')
@click.pass_context
def breakdown(ctx, description, as_json):
    """Break DESCRIPTION down into tasks"""
    config = ctx.obj
    logger = logging.getLogger(__name__)

    if not config.validate():
        sys.exit(1)

    service = TaskBreakdownService.from_config(config)
    try:
        result = asyncio.run(service.breakdown(description))
    except TaskBreakdownError as e:
        logger.error(f"Task breakdown failed: {e}")
        if as_json:
            click.echo(json.dumps({"error": str(e), "tasks": []}, indent=2))
        else:
            click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    finally:
        service.trace_recorder.flush()

    if as_json:
        click.echo(json.dumps({"tasks": [task.dict() for task in result.tasks]}, indent=2))
    else:
        print_breakdown(result)


@cli.command()
@click.option('--host', default='0.0.0.0', help='Interface to bind')
@click.option('--port', default=8000, type=int, help='Port to listen on')
@click.option('--reload', is_flag=True, help='Reload on code changes (development only)')
@click.pass_context
def serve(ctx, host, port, reload):
    """Run the HTTP API"""
    import uvicorn

    config = ctx.obj
    if not config.validate():
        sys.exit(1)

    # The app loads its own Config on startup; point it at the same file
    os.environ['VIBESANA_CONFIG'] = config.config_path
    uvicorn.run("api.main:app", host=host, port=port, reload=reload, log_level="info")


@cli.command('check-config')
@click.pass_context
def check_config(ctx):
    """Validate configuration"""
    config = ctx.obj
    llm_config = config.get_llm_config()

    click.echo(f"Config file: {config.config_path}")
    click.echo(f"Model: {llm_config['model']} (temperature={llm_config['temperature']}, "
               f"max_tokens={llm_config['max_tokens']}, timeout={llm_config['timeout']}s)")
    if config.is_tracing_enabled():
        click.echo(f"Tracing: enabled (project {config.get_tracing_config()['project_name']})")
    else:
        click.echo("Tracing: disabled (OPIK_API_KEY not set)")

    if config.validate():
        click.echo("✅ Configuration is valid")
    else:
        click.echo("❌ Configuration is invalid - check the log for details")
        sys.exit(1)


if __name__ == '__main__':
    cli()
