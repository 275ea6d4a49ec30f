# -*- coding: utf-8 -*-
"""cn image commands - Manage the cluster container image."""
# pylint: disable=no-value-for-parameter

from typing import Optional

import click

from ceph_nano.exception import CephNanoException
from ceph_nano.manager import ClusterManager
from ceph_nano.registry import count_tags, page_count
from ceph_nano.cli.utils.console import echo_info, echo_plain, echo_success
from ceph_nano.cli.utils.errors import exit_on_error


@click.group()
def image():
    """Manage the container image clusters run from."""


@image.command()
@click.argument("image_name", required=False)
def pull(image_name: Optional[str]):
    """
    Pull the cluster image, unless it is already present.

    Examples:
    \b
    # Pull the default image
    $ cn image pull

    # Pull a given image
    $ cn image pull ceph/daemon:latest-nano
    """
    try:
        pulled = ClusterManager().pull_image(
            image_name,
            on_progress=lambda _: echo_plain(".", nl=False),
        )
    except CephNanoException as e:
        exit_on_error(e)
        return

    if pulled:
        echo_plain("")
        echo_success("Image pulled")
    else:
        echo_info("Image already present")


@image.command()
def tags():
    """
    Show how many tags the image repository publishes.

    Examples:
    \b
    $ cn image tags
    """
    try:
        count = count_tags()
    except CephNanoException as e:
        exit_on_error(e)
        return

    echo_info(f"{count} tags available over {page_count(count)} pages")


if __name__ == "__main__":
    image()
