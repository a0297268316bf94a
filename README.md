# rns

Building blocks for a small HTTP/1.1 server:

- `rns.request`: reads a request (status line, headers, body) from a binary stream.
- `rns.response`: versions, status codes, headers and responses written to a binary stream.
- `rns.web`: a `RouteMap` from URI and method to an action, and a `PooledServer` that runs each request through authenticate, throttle and dispatch.
- `rns.worker_pool`: a fixed-size `Pool` of worker threads that run submitted jobs.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Responses

```python
import io
from rns.response import Header, Response, ResponseCode, Version

response = Response(
    Version.HTTP_1_1,
    ResponseCode.OK,
    [Header.parse("Content-Type: text/plain"), Header.parse("Content-Length: 5")],
    b"Hello",
)
out = io.BytesIO()
response.write_to(out)
# b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\nContent-Length: 5\r\n\r\nHello"
```

- `ResponseCode` holds a numeric code and a reason phrase. Ready-made codes are `OK`, `BAD_REQUEST`, `UNAUTHORIZED`, `FORBIDDEN`, `NOT_FOUND`, `METHOD_NOT_ALLOWED`, `IM_A_TEAPOT`, `TOO_MANY_REQUESTS` and `INTERNAL_SERVER_ERROR`. Two codes are equal when their numbers are equal; the reason is ignored.
- `HttpError` is the exception raised throughout the package; its `code` attribute is the `ResponseCode`.
- `Header.parse` trims whitespace around the name and the value and raises `HttpError` (400) when the line has no colon. `Header.to_http` gives `Name: value`.
- `Version` has `HTTP_1_1`, `HTTP_2` and `HTTP_3`, but only `HTTP_1_1` can be written; turning the others into a string raises `ValueError`.
- `Response.send_code(version, code, stream)` writes a response with a status line only.

## Requests

```python
import io
from rns.request import Request

stream = io.BytesIO(b"GET /test HTTP/1.1\r\nHost: www.example.com\r\n\r\n{\"meow\": 1}")
request = Request.build(stream)
request.method, request.uri   # ("GET", "/test")
request.headers               # [Header(name="Host", value="www.example.com")]
request.body                  # b'{"meow": 1}'
request.respond(response)     # writes to the same stream
```

Only `HTTP/1.1` requests are accepted. `Request.build` raises `HttpError`:

- 400 when the status line has fewer than three parts or another version, or a header line has no colon. Nothing is written to the stream in these cases.
- 400 when the stream is empty or ends before the blank line that closes the headers; a bare `400 Bad Request` response is written to the stream first.
- 500 when reading fails, after a bare `500 Internal Server Error` response has been written.

If writing that error response fails, the error raised is 500. Everything after the blank line is read as the body. `StatusLine.parse` parses a status line on its own.

## Routing

```python
from rns.web import RouteMap
from rns.response import HttpError

routes = RouteMap()

def hello(request):
    ...

routes.insert_route("/hello", "GET", hello)
routes.insert_route_methods("/items", ["GET", "POST"], hello)

action = routes.get_action("/hello", "GET")

try:
    routes.get_action("/hello", "DELETE")
except HttpError as error:
    print(error.code)   # 405 Method Not Allowed
```

A URI with no registered routes gives 404; a registered URI without the method gives 405. Registering the same URI and method again replaces the earlier action.

## Serving

```python
from rns.web import PooledServer, RouteMap
from rns.worker_pool import Pool

server = PooledServer(routes, Pool(4))
server.serve_request(stream)   # in the calling thread
server.submit(stream)          # on a worker
```

`serve_request` builds a `Request` from the stream, then calls `authenticate`, `throttle` and `dispatch`. If any of them raises `HttpError`, a bare response with that code is written back; otherwise the action found by `dispatch` is called with the request. `authenticate` and `throttle` accept everything; override them in a subclass to refuse requests by raising `HttpError`. A request that cannot be read makes `serve_request` raise `HttpError`; `submit` logs that as a warning instead.

## Worker pool

```python
from rns.worker_pool import Pool

with Pool(4) as pool:
    for i in range(4):
        pool.execute(lambda i=i: print(f"I have {i}!"))
```

The number of workers must be from 1 to 255, otherwise `ValueError` is raised. `shutdown` (also called when the `with` block ends) lets the workers finish the jobs already queued, waits for them, and raises `RuntimeError` if a worker stopped because a job raised. Calling `execute` after `shutdown` raises `RuntimeError`.

## What it does not do

There is no listening socket, accept loop or command to start a server: you hand `PooledServer` a binary stream for each connection yourself. The body is read until the stream ends, without looking at `Content-Length`, and no `Content-Length` header is added to responses for you.