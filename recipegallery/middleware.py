"""WSGI middleware that buffers and logs request and response bodies."""

from __future__ import annotations

import io
import logging
from http import HTTPStatus
from typing import Any, Callable, Iterable, Iterator

from .errors import BodyMiddlewareError, _debug_str

_logger = logging.getLogger(__name__)

Environ = dict[str, Any]
StartResponse = Callable[..., Callable[[bytes], Any]]


def buffer_and_log(
    direction: str, chunks: Iterable[bytes], logger: logging.Logger | None = None
) -> bytes:
    """Collect a body into bytes and log it when it is valid UTF-8.

    Raises BodyMiddlewareError if reading the chunks fails.
    """
    log = logger or _logger
    try:
        data = b"".join(bytes(chunk) for chunk in chunks)
    except Exception as exc:
        raise BodyMiddlewareError(direction, str(exc)) from exc
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        pass
    else:
        log.info("%s body = %s", direction, _debug_str(text))
    return data


def _read_input(environ: Environ) -> Iterator[bytes]:
    stream = environ.get("wsgi.input")
    if stream is None:
        return
    try:
        size: int | None = int(environ.get("CONTENT_LENGTH") or "")
    except ValueError:
        size = None
    if size is not None:
        if size > 0:
            yield stream.read(size)
    elif environ.get("wsgi.input_terminated"):
        yield stream.read()


def _response_chunks(written: list[bytes], result: Iterable[bytes]) -> Iterator[bytes]:
    for chunk in result:
        yield from written
        written.clear()
        yield chunk
    yield from written
    written.clear()


class PrintBodyMiddleware:
    """Wrap a WSGI application, logging every request and response body."""

    def __init__(self, app: Callable[[Environ, StartResponse], Iterable[bytes]],
                 logger: logging.Logger | None = None) -> None:
        self.app = app
        self.logger = logger or _logger

    def _error(self, err: BodyMiddlewareError, start_response: StartResponse) -> list[bytes]:
        code, message = err.to_response()
        body = message.encode("utf-8")
        start_response(
            f"{code} {HTTPStatus(code).phrase}",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]

    def __call__(self, environ: Environ, start_response: StartResponse) -> list[bytes]:
        self.logger.debug(
            "%r", {key: value for key, value in environ.items() if key.isupper()}
        )
        try:
            request_body = buffer_and_log("request", _read_input(environ), self.logger)
        except BodyMiddlewareError as err:
            return self._error(err, start_response)
        environ["wsgi.input"] = io.BytesIO(request_body)
        environ["CONTENT_LENGTH"] = str(len(request_body))

        captured: dict[str, Any] = {}
        written: list[bytes] = []

        def capture(status: str, headers: list[tuple[str, str]], exc_info: Any = None):
            if exc_info is not None and captured:
                raise exc_info[1].with_traceback(exc_info[2])
            captured["status"] = status
            captured["headers"] = list(headers)
            return written.append

        result = self.app(environ, capture)
        try:
            response_body = buffer_and_log(
                "response", _response_chunks(written, result), self.logger
            )
        except BodyMiddlewareError as err:
            return self._error(err, start_response)
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()

        if "status" not in captured:
            raise RuntimeError("application returned without starting a response")
        self.logger.debug("%r", (captured["status"], captured["headers"]))
        start_response(captured["status"], captured["headers"])
        return [response_body]