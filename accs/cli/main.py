"""
Main CLI entry point for ACCS
"""

import logging

import click

from .. import __version__
from ..core.config import Config
from ..core.observability import setup_logfire
from .score import score_group


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    ACCS - Authenticity & Conversion Confidence Score

    Score creator content for paid-ad readiness from transcripts, captions,
    engagement and promotion history.
    """
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    Config.validate()
    setup_logfire()


# Register command groups
cli.add_command(score_group)


if __name__ == '__main__':
    cli()
