"""Word-level writer on top of a raw connection.

The communicator owns word framing: it encodes text, prefixes each word
with its length, and streams large values straight from a file object.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Protocol

from ..protocol.words import DEFAULT_ENCODING, encode_length, encode_word

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 0xFFFF


class Connection(Protocol):
    def is_accepting_data(self) -> bool: ...

    def write(self, data: bytes) -> int: ...


class Communicator:
    """Writes length-prefixed words to a connection.

    Usage::

        conn = SocketConnection("192.168.88.1")
        conn.open()
        com = Communicator(conn)
        Request("/system/identity/print").send(com)
    """

    def __init__(
        self,
        connection: Connection,
        encoding: str = DEFAULT_ENCODING,
        chunk_size: int = STREAM_CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")
        self._connection = connection
        self._encoding = encoding
        self._chunk_size = chunk_size

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def encoding(self) -> str:
        return self._encoding

    def is_accepting_data(self) -> bool:
        return self._connection.is_accepting_data()

    def send_word(self, word: str) -> int:
        """Send one word.

        Returns:
            Number of bytes written, prefix included.
        """
        logger.debug("-> %r", word)
        return self._connection.write(encode_word(word, self._encoding))

    def send_word_from_stream(self, prefix: str, stream: BinaryIO) -> int:
        """Send one word made of ``prefix`` followed by the rest of ``stream``.

        The stream is read from its current position in chunks and its
        position is restored afterwards.

        Args:
            prefix: Text sent before the stream contents, e.g. ``=contents=``.
            stream: Seekable binary stream.

        Returns:
            Number of bytes written, prefix included.

        Raises:
            ConnectionError: If the stream ends before the announced length.
        """
        start = stream.tell()
        stream.seek(0, io.SEEK_END)
        remaining = stream.tell() - start
        stream.seek(start, io.SEEK_SET)

        head = prefix.encode(self._encoding)
        logger.debug("-> %r + <%d bytes from stream>", prefix, remaining)
        sent = self._connection.write(encode_length(len(head) + remaining) + head)
        try:
            while remaining > 0:
                chunk = stream.read(min(self._chunk_size, remaining))
                if not chunk:
                    raise ConnectionError(
                        f"Stream ended with {remaining} bytes still announced"
                    )
                sent += self._connection.write(chunk)
                remaining -= len(chunk)
        finally:
            stream.seek(start, io.SEEK_SET)
        return sent
