"""
Deferred log values for HTTP messages.

A log value wraps a request or response and renders it to text only when
``str()`` is called, which the stages do only after the detail gate passed.
The rendered text is memoized per instance, so the body is read at most once.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

import httpx

SUPPORTED_CONTENT_TYPES = (
    "text/",
    "application/json",
    "application/xml",
    "application/x-www-form-urlencoded",
)

EMPTY_CONTENT = "(empty)"

HttpMessage = Union[httpx.Request, httpx.Response]


class Kind(str, Enum):
    """Direction of the logged message."""

    REQUEST = "request"
    RESPONSE = "response"

    @property
    def label(self) -> str:
        return "Request" if self is Kind.REQUEST else "Response"


def media_type(content_type: Optional[str]) -> Optional[str]:
    """Media type without parameters, ``None`` when no Content-Type is set."""
    if content_type is None:
        return None
    return content_type.split(";", 1)[0].strip()


def is_supported_media_type(value: Optional[str]) -> bool:
    # Case-sensitive substring match
    if not value:
        return False
    return any(token in value for token in SUPPORTED_CONTENT_TYPES)


def _charset(content_type: Optional[str]) -> str:
    if content_type:
        for param in content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
    return "utf-8"


def _decode(body: bytes, content_type: Optional[str]) -> str:
    try:
        return body.decode(_charset(content_type), errors="replace")
    except LookupError:
        # Unknown charset label
        return body.decode("utf-8", errors="replace")


def has_content(message: Any) -> bool:
    """Whether the message carries a body at all.

    Responses always carry content; requests only when they declare a length
    or a transfer encoding.
    """
    if message is None:
        return False
    if isinstance(message, httpx.Response):
        return True
    headers = message.headers
    return "content-length" in headers or "transfer-encoding" in headers


async def copy_body(message: HttpMessage) -> bytes:
    """Return the raw body without taking it away from other readers.

    Already-buffered messages are returned as is. Unread streams are drained
    and closed, then replaced by an in-memory stream with the same bytes.
    """
    try:
        return message.content
    except (httpx.RequestNotRead, httpx.ResponseNotRead):
        pass

    stream = message.stream
    try:
        body = b"".join([chunk async for chunk in stream])
    finally:
        await stream.aclose()
    message.stream = httpx.ByteStream(body)
    return body


class HeadersLogValue:
    """Lazily formatted header block of a request or response."""

    def __init__(self, kind: Kind, headers: Optional[httpx.Headers]):
        self.kind = kind
        self.headers = headers
        self._formatted: Optional[str] = None

    def __str__(self) -> str:
        if self._formatted is None:
            lines = [f"{self.kind.label} Headers:"]
            if self.headers is not None:
                grouped: Dict[str, List[str]] = {}
                names: Dict[str, str] = {}
                encoding = self.headers.encoding
                for raw_name, raw_value in self.headers.raw:
                    name = raw_name.decode(encoding)
                    value = raw_value.decode(encoding)
                    key = name.lower()
                    names.setdefault(key, name)
                    grouped.setdefault(key, []).append(value)
                for key, values in grouped.items():
                    lines.append(f"{names[key]}: {', '.join(values)}")
            self._formatted = "\n".join(lines)
        return self._formatted

    @classmethod
    def for_message(cls, kind: Kind, message: Optional[HttpMessage]) -> "HeadersLogValue":
        # httpx keeps entity headers (Content-Type, Content-Length) on the message
        return cls(kind, message.headers if message is not None else None)


class ContentLogValue:
    """Lazily formatted body of a request or response.

    Only text-like content types are read. Anything else renders a
    placeholder naming the content type and leaves the body untouched.
    """

    def __init__(self, kind: Kind, message: Optional[Any]):
        self.kind = kind
        self.message = message
        self._snapshot: Optional[HttpMessage] = None
        self._formatted: Optional[str] = None

    @property
    def content_type(self) -> Optional[str]:
        if self.message is None:
            return None
        return self.message.headers.get("content-type")

    @property
    def media_type(self) -> Optional[str]:
        return media_type(self.content_type)

    @property
    def has_content(self) -> bool:
        return has_content(self.message)

    @property
    def reads_body(self) -> bool:
        """True when formatting will read the body."""
        return self.has_content and is_supported_media_type(self.media_type)

    async def buffer(self) -> None:
        """Make an async-streamed body readable by ``__str__``.

        No-op unless the body is going to be read.
        """
        if not self.reads_body or self._snapshot is not None or self._formatted is not None:
            return
        message = self.message
        try:
            message.content
            return
        except (httpx.RequestNotRead, httpx.ResponseNotRead):
            pass

        body = await copy_body(message)
        if isinstance(message, httpx.Response):
            # A fresh response decodes Content-Encoding the same way httpx does
            self._snapshot = httpx.Response(
                message.status_code, headers=message.headers, content=body
            )
        else:
            self._snapshot = httpx.Request(
                message.method, message.url, headers=message.headers, content=body
            )

    def _read_text(self) -> str:
        source = self._snapshot if self._snapshot is not None else self.message
        if isinstance(source, httpx.Response):
            return source.text
        return _decode(source.content, self.content_type)

    def __str__(self) -> str:
        if self._formatted is None:
            if not self.has_content:
                text = EMPTY_CONTENT
            elif self.reads_body:
                text = self._read_text()
            else:
                text = (
                    f"Content is empty or Content-Type ({self.media_type or ''}) "
                    "is not supported for logging."
                )
            self._formatted = f"{self.kind.label} Content:\n{text}"
        return self._formatted
