"""Transport layer: TCP connection and word framing."""

from .socket_connection import SocketConnection
from .communicator import Communicator
