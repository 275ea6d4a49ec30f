# -*- coding: utf-8 -*-
"""Ceph Nano CLI - Main entry point."""
# pylint: disable=no-value-for-parameter

import logging
from typing import Optional

import click

from ceph_nano.cli.commands import (
    image,
    list_cmd,
    purge,
    start,
    status,
    stop,
)
from ceph_nano.config import get_settings, reset_settings
from ceph_nano.version import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cn")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show debug logs of every engine call",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to .env file with CN_ settings overriding the environment",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Optional[str]):
    """
    Ceph Nano - a one-container Ceph cluster exposing an S3 gateway.

    Create, inspect and remove throwaway clusters from a single command.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if config:
        reset_settings()
        get_settings(config)


# Register commands
cli.add_command(list_cmd.list_clusters)
cli.add_command(status.status)
cli.add_command(start.start)
cli.add_command(stop.stop)
cli.add_command(purge.purge)
cli.add_command(image.image)


def main():
    """Entry point for console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
