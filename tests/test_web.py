import io

import pytest

from rns.request import Request
from rns.response import HttpError, Response, ResponseCode, Version
from rns.web import PooledServer, RouteMap
from rns.worker_pool import Pool


def _dummy_function(request):
    pass


@pytest.fixture
def pool():
    workers = Pool(2)
    yield workers
    workers.shutdown()


def _hello(request):
    request.respond(Response(Version.HTTP_1_1, ResponseCode.OK, body=b"hi"))


def test_route_map_single():
    route_map = RouteMap()
    closure = lambda request: None  # noqa: E731
    route_map.insert_route("/test-fn", "GET", _dummy_function)
    route_map.insert_route("/test-cl", "GET", closure)

    assert route_map.get_action("/test-fn", "GET") is _dummy_function
    assert route_map.get_action("/test-cl", "GET") is closure


def test_route_map_multi():
    route_map = RouteMap()
    route_map.insert_route_methods("/test-fn", ["GET", "POST"], _dummy_function)

    assert route_map.get_action("/test-fn", "GET") is _dummy_function
    assert route_map.get_action("/test-fn", "POST") is _dummy_function


def test_route_map_negative():
    route_map = RouteMap()
    route_map.insert_route("/test-fn", "GET", _dummy_function)

    assert route_map.get_action("/test-fn", "GET") is _dummy_function

    with pytest.raises(HttpError) as info:
        route_map.get_action("/test-non-existant", "GET")
    assert info.value.code == ResponseCode.NOT_FOUND

    with pytest.raises(HttpError) as info:
        route_map.get_action("/test-fn", "POST")
    assert info.value.code == ResponseCode.METHOD_NOT_ALLOWED


def test_route_map_overwrites():
    route_map = RouteMap()
    route_map.insert_route("/a", "GET", _dummy_function)
    route_map.insert_route("/a", "GET", _hello)
    assert route_map.get_action("/a", "GET") is _hello


def test_dispatch_returns_registered_action(pool):
    routes = RouteMap()
    routes.insert_route("/hello", "GET", _hello)
    server = PooledServer(routes, pool)
    request = Request.build(io.BytesIO(b"GET /hello HTTP/1.1\r\n\r\n"))
    assert server.dispatch(request) is _hello


def test_dispatch_unknown_method(pool):
    routes = RouteMap()
    routes.insert_route("/hello", "GET", _hello)
    server = PooledServer(routes, pool)
    request = Request.build(io.BytesIO(b"DELETE /hello HTTP/1.1\r\n\r\n"))
    with pytest.raises(HttpError) as info:
        server.dispatch(request)
    assert info.value.code == ResponseCode.METHOD_NOT_ALLOWED


def test_serve_request_runs_action(pool):
    routes = RouteMap()
    routes.insert_route("/hello", "GET", _hello)
    server = PooledServer(routes, pool)
    data = b"GET /hello HTTP/1.1\r\n\r\n"
    stream = io.BytesIO(data)
    server.serve_request(stream)
    assert stream.getvalue() == data + b"HTTP/1.1 200 OK\r\n\r\nhi"


def test_serve_request_not_found(pool):
    server = PooledServer(RouteMap(), pool)
    data = b"GET /missing HTTP/1.1\r\n\r\n"
    stream = io.BytesIO(data)
    server.serve_request(stream)
    assert stream.getvalue() == data + b"HTTP/1.1 404 Not Found\r\n\r\n"


def test_serve_request_bad_request(pool):
    server = PooledServer(RouteMap(), pool)
    stream = io.BytesIO()
    with pytest.raises(HttpError) as info:
        server.serve_request(stream)
    assert info.value.code == ResponseCode.BAD_REQUEST
    assert stream.getvalue() == b"HTTP/1.1 400 Bad Request\r\n\r\n"


def test_serve_requests_on_pool():
    seen = []

    def recording_action(request):
        seen.append(request)
        _hello(request)

    routes = RouteMap()
    routes.insert_route_methods("/hello", ["GET", "POST"], recording_action)
    get_data = b"GET /hello HTTP/1.1\r\n\r\n"
    post_data = b"POST /hello HTTP/1.1\r\n\r\n"
    get_stream = io.BytesIO(get_data)
    post_stream = io.BytesIO(post_data)

    workers = Pool(2)
    server = PooledServer(routes, workers)
    for stream in (get_stream, post_stream):
        workers.execute(lambda stream=stream: server.serve_request(stream))
    workers.shutdown()

    assert len(seen) == 2
    assert [server.dispatch(request) for request in seen] == [
        recording_action,
        recording_action,
    ]
    assert get_stream.getvalue() == get_data + b"HTTP/1.1 200 OK\r\n\r\nhi"
    assert post_stream.getvalue() == post_data + b"HTTP/1.1 200 OK\r\n\r\nhi"