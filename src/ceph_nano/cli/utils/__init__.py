# -*- coding: utf-8 -*-
from .console import (
    echo_error,
    echo_info,
    echo_plain,
    echo_success,
    format_json,
    format_status_report,
    format_table,
)
from .errors import exit_on_error

__all__ = [
    "echo_error",
    "echo_info",
    "echo_plain",
    "echo_success",
    "exit_on_error",
    "format_json",
    "format_status_report",
    "format_table",
]
