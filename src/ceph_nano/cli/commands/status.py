# -*- coding: utf-8 -*-
"""cn status command - Show cluster status and S3 details."""
# pylint: disable=no-value-for-parameter

import click

from ceph_nano.exception import CephNanoException
from ceph_nano.manager import ClusterManager
from ceph_nano.cli.utils.console import (
    echo_plain,
    format_json,
    format_status_report,
)
from ceph_nano.cli.utils.errors import exit_on_error


@click.command()
@click.argument("cluster_name", required=True)
@click.option(
    "--output-format",
    "-f",
    help="Output format: text, table or json",
    type=click.Choice(["text", "table", "json"], case_sensitive=False),
    default="text",
)
def status(cluster_name: str, output_format: str):
    """
    Show the status of a cluster once it is fully up.

    Waits for the cluster to log a clean start and for its S3 gateway to
    answer, then prints the Ceph health and the S3 access details.

    Examples:
    \b
    # Show cluster status
    $ cn status mycluster

    # JSON output
    $ cn status mycluster --output-format json
    """
    try:
        report = ClusterManager().status(cluster_name)
    except CephNanoException as e:
        exit_on_error(e)
        return

    if output_format == "json":
        print(format_json(report.model_dump()))
    elif output_format == "table":
        print(format_status_report(report.model_dump()))
    else:
        echo_plain(report.render())


if __name__ == "__main__":
    status()
