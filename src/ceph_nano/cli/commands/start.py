# -*- coding: utf-8 -*-
"""cn start command - Start a cluster, creating it if needed."""
# pylint: disable=no-value-for-parameter

from typing import Optional

import click

from ceph_nano.exception import CephNanoException
from ceph_nano.manager import ClusterManager
from ceph_nano.cli.utils.console import echo_info, echo_plain
from ceph_nano.cli.utils.errors import exit_on_error


def _pull_progress(_message: dict) -> None:
    # One dot per progress message, the engine sends a lot of them
    echo_plain(".", nl=False)


@click.command()
@click.argument("cluster_name", required=True)
@click.option(
    "--work-dir",
    "-d",
    help="Directory of the host mounted as /tmp in the cluster",
    type=click.Path(file_okay=False),
    default=None,
)
@click.option(
    "--image",
    "-i",
    help="Container image to run the cluster from",
    default=None,
)
def start(cluster_name: str, work_dir: Optional[str], image: Optional[str]):
    """
    Start a cluster, creating it when it does not exist yet.

    Examples:
    \b
    # Create and start a cluster
    $ cn start mycluster

    # Share a host directory with the cluster
    $ cn start mycluster --work-dir /srv/data
    """
    echo_info(f"Starting cluster {cluster_name}...")
    try:
        report = ClusterManager().start(
            cluster_name,
            work_dir=work_dir,
            image=image,
            on_pull_progress=_pull_progress,
        )
    except CephNanoException as e:
        exit_on_error(e)
        return

    echo_plain(report.render())


if __name__ == "__main__":
    start()
