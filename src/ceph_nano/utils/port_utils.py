# -*- coding: utf-8 -*-
import logging
import socket
from typing import Callable, Optional, Tuple

from ..config import Settings, get_settings
from ..constant import PORT_NOT_FOUND

logger = logging.getLogger(__name__)


def is_port_free(port, host="0.0.0.0", timeout=1.0):
    """
    Check whether nothing answers on a port.

    A refused or timed out connection is taken as "free". This is a
    heuristic: the port can be claimed by someone else before it is bound.

    Args:
        port (int): The port number to check.
        host (str): Address to connect to.
        timeout (float): Connection timeout in seconds.

    Returns:
        bool: True if the connection failed, False if something listens.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return False
    except OSError:
        return True


def allocate_gateway_port(
    port_range: Optional[Tuple[int, int]] = None,
    probe: Optional[Callable[[int], bool]] = None,
    config: Optional[Settings] = None,
) -> str:
    """
    Find the first free port to bind the S3 gateway on.

    Args:
        port_range: Inclusive (start, end) range, scanned in ascending order.
        probe: Callable telling whether a port is free.
        config: Settings supplying the default range and probe parameters.

    Returns:
        str: The port number, or ``"notfound"`` if every port is in use.
    """
    settings = config or get_settings()
    start, end = port_range or settings.PORT_RANGE
    if probe is None:

        def probe(port):
            return is_port_free(
                port,
                host=settings.PORT_PROBE_HOST,
                timeout=settings.PORT_PROBE_TIMEOUT,
            )

    for port in range(start, end + 1):
        if probe(port):
            logger.debug(f"Port {port} is free")
            return str(port)
        logger.debug(f"Port {port} is in use")

    logger.warning(f"No free ports available in the range {start}-{end}")
    return PORT_NOT_FOUND
