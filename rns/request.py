"""Parsing of incoming HTTP requests from a binary stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO

from rns.response import Header, HttpError, Response, ResponseCode, Version

_SUPPORTED_VERSION = "HTTP/1.1"


@dataclass(frozen=True)
class StatusLine:
    """The first line of an HTTP request."""

    method: str
    uri: str
    version: Version

    @classmethod
    def parse(cls, line: str) -> StatusLine:
        """Parse ``METHOD URI VERSION``; raise HttpError(400) when malformed."""
        parts = line.split()
        if len(parts) < 3:
            raise HttpError(ResponseCode.BAD_REQUEST)
        if parts[2] != _SUPPORTED_VERSION:
            raise HttpError(ResponseCode.BAD_REQUEST)
        return cls(parts[0], parts[1], Version.HTTP_1_1)


def _read_line(stream: BinaryIO) -> str | None:
    """Read one line without its LF or CRLF ending; None at end of stream."""
    raw = stream.readline()
    if not raw:
        return None
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode("utf-8")


def _reject(stream: BinaryIO, code: ResponseCode) -> HttpError:
    """Send ``code`` to the client and return the error to raise.

    A failure to write turns the error into a 500.
    """
    try:
        Response.send_code(Version.HTTP_1_1, code, stream)
    except OSError:
        return HttpError(ResponseCode.INTERNAL_SERVER_ERROR)
    return HttpError(code)


@dataclass
class Request:
    """A parsed HTTP request together with the stream to answer on."""

    status_line: StatusLine
    headers: list[Header] = field(default_factory=list)
    body: bytes = b""
    stream: BinaryIO | None = None

    @property
    def method(self) -> str:
        return self.status_line.method

    @property
    def uri(self) -> str:
        return self.status_line.uri

    @property
    def version(self) -> Version:
        return self.status_line.version

    @classmethod
    def build(cls, stream: BinaryIO) -> Request:
        """Read a whole request from ``stream``.

        On a missing request or an unterminated header block a 400 response is
        written to the stream before HttpError is raised; read failures answer
        with 500. A malformed status line or header raises HttpError(400)
        without writing anything.
        """
        try:
            first = _read_line(stream)
        except (OSError, UnicodeDecodeError):
            raise _reject(stream, ResponseCode.INTERNAL_SERVER_ERROR) from None
        if first is None:
            raise _reject(stream, ResponseCode.BAD_REQUEST)
        status_line = StatusLine.parse(first)

        headers: list[Header] = []
        while True:
            try:
                line = _read_line(stream)
            except (OSError, UnicodeDecodeError):
                raise _reject(stream, ResponseCode.INTERNAL_SERVER_ERROR) from None
            if line is None:
                raise _reject(stream, ResponseCode.BAD_REQUEST)
            if not line:
                break
            headers.append(Header.parse(line))

        try:
            body = stream.read() or b""
        except OSError:
            raise _reject(stream, ResponseCode.INTERNAL_SERVER_ERROR) from None

        return cls(status_line, headers, bytes(body), stream)

    def respond(self, response: Response) -> None:
        """Write ``response`` to the request's stream. IO errors propagate."""
        if self.stream is None:
            raise RuntimeError("request has no stream to respond on")
        response.write_to(self.stream)