# -*- coding: utf-8 -*-
"""cn stop command - Stop a running cluster."""
# pylint: disable=no-value-for-parameter

import click

from ceph_nano.exception import CephNanoException
from ceph_nano.manager import ClusterManager
from ceph_nano.cli.utils.console import echo_success
from ceph_nano.cli.utils.errors import exit_on_error


@click.command()
@click.argument("cluster_name", required=True)
def stop(cluster_name: str):
    """
    Stop a cluster, keeping its data.

    Examples:
    \b
    $ cn stop mycluster
    """
    try:
        ClusterManager().stop(cluster_name)
    except CephNanoException as e:
        exit_on_error(e)
        return

    echo_success(f"Cluster {cluster_name} stopped")


if __name__ == "__main__":
    stop()
