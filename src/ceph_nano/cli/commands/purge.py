# -*- coding: utf-8 -*-
"""cn purge command - Remove a cluster and optionally its image."""
# pylint: disable=no-value-for-parameter

import sys

import click

from ceph_nano.exception import CephNanoException, PurgeNotConfirmedError
from ceph_nano.manager import ClusterManager
from ceph_nano.model import PurgeOptions
from ceph_nano.cli.utils.console import (
    echo_error,
    echo_plain,
    echo_success,
)
from ceph_nano.cli.utils.errors import exit_on_error


@click.command()
@click.argument("cluster_name", required=True)
@click.option(
    "--yes-i-am-sure",
    "confirmed",
    is_flag=True,
    help="Confirm the cluster and all its data should be removed",
)
@click.option(
    "--all",
    "delete_image",
    is_flag=True,
    help="Also remove the container image of the cluster",
)
@click.pass_context
def purge(ctx, cluster_name: str, confirmed: bool, delete_image: bool):
    """
    DANGEROUS: remove a cluster and all its data.

    Examples:
    \b
    # Remove the cluster
    $ cn purge mycluster --yes-i-am-sure

    # Remove the cluster and its image
    $ cn purge mycluster --yes-i-am-sure --all
    """
    options = PurgeOptions(confirmed=confirmed, delete_image=delete_image)
    try:
        # Refused before any engine connection is attempted
        if not options.confirmed:
            raise PurgeNotConfirmedError()
        result = ClusterManager().purge(cluster_name, options)
    except PurgeNotConfirmedError as e:
        echo_error(str(e))
        echo_plain(ctx.get_help())
        sys.exit(e.exit_code)
    except CephNanoException as e:
        exit_on_error(e)
        return

    echo_success(f"Cluster {result.cluster} purged")
    if result.image:
        echo_success(f"Image {result.image} removed")


if __name__ == "__main__":
    purge()
