"""
CLI utilities for command line reconstruction and error reporting.
"""

import logging
from pathlib import Path

import click

from .errors import ObservableUserDefaultError

logger = logging.getLogger(__name__)

PROGRAM_NAME = "observable_user_default"


def reconstruct_command_line(click_command: click.Command, program: str = PROGRAM_NAME) -> str:
    """
    Reconstruct the command line from the current Click context.

    Used for the generation comment so a generated file records how it was
    produced. Paths are shortened to their file names and options left at
    their default value are dropped.

    Args:
        click_command: Click command object for introspection
        program: Name to start the command line with

    Returns:
        Reconstructed command line string
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return program

    arguments = []
    options = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if not value:
            continue

        if isinstance(param.type, click.Path):
            formatted = Path(str(value)).name
        else:
            formatted = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted)
        elif isinstance(param, click.Option) and value != param.default:
            flag = param.opts[0] if param.opts else f"--{param.name}"
            options.append(flag if param.is_flag else f"{flag} {formatted}")

    return " ".join([program, *arguments, *options])


def report_generation_error(error: ObservableUserDefaultError, source: str = "") -> click.ClickException:
    """Turn a generation error into a Click error carrying the diagnostic."""
    location = f"{source}: " if source else ""
    logger.debug("Generation failed", exc_info=error)
    return click.ClickException(f"{location}{error}")
