"""Build RouterOS API requests from API or CLI syntax and send them as words."""

from .protocol import Request, Query
from .transport import Communicator, SocketConnection
