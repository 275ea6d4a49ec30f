# -*- coding: utf-8 -*-
# pylint: disable=redefined-outer-name, protected-access
"""
Unit tests for network utility functions.

Tests cover:
- get_interface_ipv4s() ordering and filtering
- select_advertise_address() selection and failure modes
"""
import ipaddress
import socket
from unittest.mock import patch, MagicMock

import pytest

from ceph_nano.exception import NetworkEnumerationError, NoUsableAddressError
from ceph_nano.utils.net_utils import (
    get_interface_ipv4s,
    select_advertise_address,
)


def _addr(address, family=socket.AF_INET):
    return MagicMock(family=family, address=address)


class TestGetInterfaceIPv4s:
    """Test get_interface_ipv4s() function."""

    def test_returns_empty_list_when_no_interfaces(self):
        """Test returns [] when no network interfaces are available."""
        with patch("psutil.net_if_addrs", return_value={}):
            assert get_interface_ipv4s() == []

    def test_sorts_by_last_octet_descending(self):
        """Test addresses come back highest last octet first."""
        mock_addrs = {
            "lo": [_addr("127.0.0.1")],
            "eth0": [_addr("192.168.1.200")],
            "eth1": [_addr("10.0.0.50")],
        }

        with patch("psutil.net_if_addrs", return_value=mock_addrs):
            result = get_interface_ipv4s()

        assert [str(ip) for ip in result] == [
            "192.168.1.200",
            "10.0.0.50",
            "127.0.0.1",
        ]

    def test_sort_is_stable_on_equal_last_octets(self):
        """Test enumeration order is kept between equal last octets."""
        mock_addrs = {
            "eth0": [_addr("10.0.0.7")],
            "eth1": [_addr("172.16.0.7")],
        }

        with patch("psutil.net_if_addrs", return_value=mock_addrs):
            result = get_interface_ipv4s()

        assert [str(ip) for ip in result] == ["10.0.0.7", "172.16.0.7"]

    def test_skips_ipv6_addresses(self):
        """Test that only IPv4 entries are kept."""
        mock_addrs = {
            "eth0": [
                _addr("2001:db8::1", family=socket.AF_INET6),
                _addr("192.168.1.100"),
            ],
        }

        with patch("psutil.net_if_addrs", return_value=mock_addrs):
            result = get_interface_ipv4s()

        assert result == [ipaddress.IPv4Address("192.168.1.100")]

    def test_skips_invalid_ip_addresses(self):
        """Test that unparsable addresses are dropped."""
        mock_addrs = {
            "eth0": [
                _addr("invalid-ip"),
                _addr("192.168.1.100"),
            ],
        }

        with patch("psutil.net_if_addrs", return_value=mock_addrs):
            result = get_interface_ipv4s()

        assert result == [ipaddress.IPv4Address("192.168.1.100")]

    def test_raises_when_interfaces_cannot_be_read(self):
        """Test enumeration failures surface as NetworkEnumerationError."""
        with patch(
            "psutil.net_if_addrs",
            side_effect=OSError("permission denied"),
        ):
            with pytest.raises(NetworkEnumerationError) as exc_info:
                get_interface_ipv4s()

        assert "Unable to determine network interface address" in str(
            exc_info.value,
        )
        assert exc_info.value.exit_code == 1


class TestSelectAdvertiseAddress:
    """Test select_advertise_address() function."""

    def test_returns_first_sorted_address(self):
        """Test the highest last octet wins."""
        mock_addrs = {
            "lo": [_addr("127.0.0.1")],
            "eth0": [_addr("192.168.1.200")],
            "eth1": [_addr("10.0.0.50")],
        }

        with patch("psutil.net_if_addrs", return_value=mock_addrs):
            result = select_advertise_address()

        assert result == ipaddress.IPv4Address("192.168.1.200")

    def test_raises_when_no_ipv4_address(self):
        """Test an empty candidate list is a distinct error."""
        mock_addrs = {
            "eth0": [_addr("2001:db8::1", family=socket.AF_INET6)],
        }

        with patch("psutil.net_if_addrs", return_value=mock_addrs):
            with pytest.raises(NoUsableAddressError):
                select_advertise_address()
