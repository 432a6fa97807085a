"""
UDP Sink - Sends velocity commands as small binary datagrams.

Packet layout (little-endian, 12 bytes):
  2s  header  b'TC'
  f   linear
  f   angular
  H   sequence number, wraps at 65536
"""

import logging
import socket
import struct
from typing import Optional, Tuple

from teleop.errors import SinkUnavailableError
from teleop.types import VelocityCommand


logger = logging.getLogger(__name__)

PACKET_FORMAT = '<2sffH'
PACKET_HEADER = b'TC'
PACKET_SIZE = struct.calcsize(PACKET_FORMAT)


def pack_command(command: VelocityCommand, seq: int) -> bytes:
    """Encode a command into one datagram"""
    return struct.pack(PACKET_FORMAT, PACKET_HEADER, command.linear, command.angular, seq % 65536)


def unpack_command(data: bytes) -> Tuple[VelocityCommand, int]:
    """
    Decode a datagram produced by pack_command.

    Raises:
        ValueError: if the packet is too short or has the wrong header
    """
    if len(data) < PACKET_SIZE:
        raise ValueError(f"packet too short: {len(data)} < {PACKET_SIZE}")
    header, linear, angular, seq = struct.unpack(PACKET_FORMAT, data[:PACKET_SIZE])
    if header != PACKET_HEADER:
        raise ValueError(f"unexpected header {header!r}")
    return VelocityCommand(linear=linear, angular=angular), seq


class UdpSink:
    """
    Fire-and-forget UDP command sink.

    The socket is non-blocking; any send failure is reported as
    SinkUnavailableError so the tick is dropped and retried next time.
    """

    def __init__(self, host: str, port: int) -> None:
        self.addr = (host, port)
        self._sock: Optional[socket.socket] = None
        self._seq = 0

    def open(self) -> None:
        """Create the socket (called lazily on first send)"""
        if self._sock is not None:
            return
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setblocking(False)
        self._sock = sock
        logger.info(f'UDP sink ready → {self.addr[0]}:{self.addr[1]}')

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def send_command(self, command: VelocityCommand) -> None:
        """Send one command datagram"""
        try:
            self.open()
            self._sock.sendto(pack_command(command, self._seq), self.addr)
        except OSError as e:
            raise SinkUnavailableError(f"UDP send to {self.addr} failed: {e}") from e
        self._seq = (self._seq + 1) % 65536

    @property
    def sequence(self) -> int:
        """Sequence number of the next packet"""
        return self._seq
