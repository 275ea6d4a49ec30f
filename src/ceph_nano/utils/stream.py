# -*- coding: utf-8 -*-
import struct

from ..constant import STREAM_HEADER_SIZE

# stdin, stdout, stderr
_STREAM_TYPES = (0, 1, 2)


def _is_frame_header(chunk: bytes) -> bool:
    return (
        len(chunk) == STREAM_HEADER_SIZE
        and chunk[0] in _STREAM_TYPES
        and chunk[1:4] == b"\x00\x00\x00"
    )


def demux_output(raw: bytes) -> bytes:
    """
    Strip the multiplexing headers from attached exec output.

    Every chunk written by a non-TTY exec is prefixed with an 8-byte header
    (stream type, three padding bytes, big-endian payload size). Output that
    does not start with such a header is returned untouched, as is any
    trailing data that stops looking framed.

    Args:
        raw: Bytes read from the exec attach stream.

    Returns:
        bytes: The concatenated payloads.
    """
    if not raw:
        return b""

    if not _is_frame_header(raw[:STREAM_HEADER_SIZE]):
        return raw

    payload = bytearray()
    offset = 0
    while offset < len(raw):
        header = raw[offset : offset + STREAM_HEADER_SIZE]
        if not _is_frame_header(header):
            payload += raw[offset:]
            break
        (size,) = struct.unpack(">I", header[4:])
        start = offset + STREAM_HEADER_SIZE
        payload += raw[start : start + size]
        offset = start + size
    return bytes(payload)


def decode_output(raw: bytes) -> str:
    """Demultiplex and decode exec output, trimming surrounding space."""
    return demux_output(raw).decode("utf-8", errors="replace").strip()
