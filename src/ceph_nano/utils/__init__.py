# -*- coding: utf-8 -*-
from .net_utils import get_interface_ipv4s, select_advertise_address
from .port_utils import allocate_gateway_port, is_port_free
from .stream import decode_output, demux_output

__all__ = [
    "allocate_gateway_port",
    "decode_output",
    "demux_output",
    "get_interface_ipv4s",
    "is_port_free",
    "select_advertise_address",
]
