# -*- coding: utf-8 -*-
import ipaddress
import logging
import socket
from typing import List

import psutil

from ..exception import NetworkEnumerationError, NoUsableAddressError

logger = logging.getLogger(__name__)


def get_interface_ipv4s() -> List[ipaddress.IPv4Address]:
    """Get the IPv4 addresses of every local network interface.

    - Only IPv4 entries that parse as addresses are kept
    - The list is sorted by last octet value, highest first

    Sorting by last octet pushes the loopback address (127.0.0.1) to the
    end of the list, so the first entry is usually an outward-facing
    address without having to consult the routing table.

    Returns:
        list[IPv4Address]: Candidate addresses, possibly empty

    Raises:
        NetworkEnumerationError: If the interface table cannot be read
    """
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, psutil.Error) as e:
        raise NetworkEnumerationError(str(e)) from e

    ips = []
    for addrs in interfaces.values():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            try:
                ips.append(ipaddress.IPv4Address(addr.address))
            except ValueError:
                logger.debug(f"Skipping unparsable address {addr.address}")
                continue

    ips.sort(key=lambda ip: ip.packed[3], reverse=True)
    return ips


def select_advertise_address() -> ipaddress.IPv4Address:
    """Pick the address the S3 gateway is advertised on.

    The engine binds the gateway on 0.0.0.0, so any local address works;
    the first entry of ``get_interface_ipv4s`` is used.

    Raises:
        NoUsableAddressError: If no interface carries an IPv4 address
    """
    ips = get_interface_ipv4s()
    if not ips:
        raise NoUsableAddressError()
    logger.debug(f"Advertising {ips[0]} out of {[str(ip) for ip in ips]}")
    return ips[0]
