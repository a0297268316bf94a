"""HTTP response primitives: versions, headers, status codes and responses."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

_CRLF = b"\r\n"


class Version(enum.Enum):
    """HTTP protocol versions. Only HTTP/1.1 has a wire representation."""

    HTTP_1_1 = "HTTP/1.1"
    HTTP_2 = "HTTP/2"
    HTTP_3 = "HTTP/3"

    def __str__(self) -> str:
        if self is Version.HTTP_1_1:
            return self.value
        raise ValueError(f"{self.name} cannot be written on the wire")


@dataclass(frozen=True)
class ResponseCode:
    """An HTTP status code with its reason phrase.

    Two codes compare equal when their numeric codes match; the reason
    phrase is ignored.
    """

    code: int
    reason: str = field(compare=False)

    OK: ClassVar[ResponseCode]
    BAD_REQUEST: ClassVar[ResponseCode]
    UNAUTHORIZED: ClassVar[ResponseCode]
    FORBIDDEN: ClassVar[ResponseCode]
    NOT_FOUND: ClassVar[ResponseCode]
    METHOD_NOT_ALLOWED: ClassVar[ResponseCode]
    IM_A_TEAPOT: ClassVar[ResponseCode]
    TOO_MANY_REQUESTS: ClassVar[ResponseCode]
    INTERNAL_SERVER_ERROR: ClassVar[ResponseCode]

    def __str__(self) -> str:
        return f"{self.code} {self.reason}"


ResponseCode.OK = ResponseCode(200, "OK")
ResponseCode.BAD_REQUEST = ResponseCode(400, "Bad Request")
ResponseCode.UNAUTHORIZED = ResponseCode(401, "Unauthorized")
ResponseCode.FORBIDDEN = ResponseCode(403, "Forbidden")
ResponseCode.NOT_FOUND = ResponseCode(404, "Not Found")
ResponseCode.METHOD_NOT_ALLOWED = ResponseCode(405, "Method Not Allowed")
ResponseCode.IM_A_TEAPOT = ResponseCode(418, "I'm A Teapot")
ResponseCode.TOO_MANY_REQUESTS = ResponseCode(429, "Too Many Requests")
ResponseCode.INTERNAL_SERVER_ERROR = ResponseCode(500, "Internal Server Error")


class HttpError(Exception):
    """Raised when processing fails in a way that maps to an HTTP status."""

    def __init__(self, code: ResponseCode) -> None:
        super().__init__(str(code))
        self.code = code


@dataclass(frozen=True)
class Header:
    """A single HTTP header."""

    name: str
    value: str

    @classmethod
    def parse(cls, text: str) -> Header:
        """Parse a ``Name: value`` line; raise HttpError(400) without a colon."""
        parts = text.split(":")
        if len(parts) < 2:
            raise HttpError(ResponseCode.BAD_REQUEST)
        return cls(parts[0].strip(), parts[1].strip())

    def to_http(self) -> str:
        return f"{self.name}: {self.value}"


@dataclass
class Response:
    """An HTTP response ready to be written to a stream."""

    version: Version
    code: ResponseCode
    headers: list[Header] = field(default_factory=list)
    body: bytes = b""

    def status_line(self) -> str:
        return f"{self.version} {self.code}"

    def write_to(self, stream: BinaryIO) -> None:
        """Write the whole response to a binary stream. IO errors propagate."""
        stream.write(self.status_line().encode())
        stream.write(_CRLF)
        for header in self.headers:
            stream.write(header.to_http().encode())
            stream.write(_CRLF)
        stream.write(_CRLF)
        stream.write(bytes(self.body))

    @classmethod
    def send_code(cls, version: Version, code: ResponseCode, stream: BinaryIO) -> None:
        """Write a response carrying only a status line."""
        cls(version, code).write_to(stream)