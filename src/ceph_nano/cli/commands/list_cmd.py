# -*- coding: utf-8 -*-
"""cn ls command - List all clusters."""
# pylint: disable=no-value-for-parameter

import click

from ceph_nano.exception import CephNanoException
from ceph_nano.manager import ClusterManager
from ceph_nano.cli.utils.console import (
    echo_info,
    format_json,
    format_table,
)
from ceph_nano.cli.utils.errors import exit_on_error

HEADERS = ["NAME", "STATUS", "IMAGE", "IMAGE RELEASE", "IMAGE CREATION TIME"]


@click.command(name="ls")
@click.option(
    "--output-format",
    "-f",
    help="Output format: table or json",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
)
def list_clusters(output_format: str):
    """
    List all clusters, running or not.

    Examples:
    \b
    # List all clusters
    $ cn ls

    # JSON output
    $ cn ls --output-format json
    """
    try:
        rows = ClusterManager().list_clusters()
    except CephNanoException as e:
        exit_on_error(e)
        return

    if output_format == "json":
        print(format_json([row.model_dump() for row in rows]))
        return

    if not rows:
        echo_info("No clusters found")
        return

    print(
        format_table(
            HEADERS,
            [
                [
                    row.name,
                    row.state,
                    row.image_tag,
                    row.image_release,
                    row.image_created,
                ]
                for row in rows
            ],
        ),
    )


if __name__ == "__main__":
    list_clusters()
