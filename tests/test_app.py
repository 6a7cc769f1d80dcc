"""Tests for perch.app — ASGI entry, error responders, and HEAD handling."""

import logging
from typing import Any

import pytest

from perch.app import App
from perch.config import AppConfig
from perch.errors import ConfigurationError, HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.routing.host import HostRouter
from perch.routing.router import Router
from perch.testing import TestClient


def _router() -> Router:
    router = Router()
    router.register("/", "GET", lambda request: "home")
    router.register("/b", "GET", lambda request: "b-get", "POST", lambda request: "b-post")
    router.register("/d/", "GET", lambda request: "d")
    router.register("/users/<name>", "GET", lambda request: f"user {request.params['name']}")
    router.register("/empty", "GET", lambda request: None)
    router.register("/raw", "GET", lambda request: b"\x00\x01")
    return router


class TestAppConstruction:
    def test_requires_callable_handler(self) -> None:
        with pytest.raises(ConfigurationError):
            App("not a handler")  # type: ignore[arg-type]

    def test_default_config(self) -> None:
        assert App(_router()).config == AppConfig()


class TestServing:
    @pytest.mark.anyio
    async def test_match(self) -> None:
        response = await TestClient(_router()).get("/users/ann")
        assert response.status == 200
        assert response.text == "user ann"
        assert response.content_type == "text/plain; charset=utf-8"

    @pytest.mark.anyio
    async def test_not_found(self) -> None:
        response = await TestClient(_router()).get("/Bogus/Path")
        assert response.status == 404
        assert response.text == "Not Found\n"

    @pytest.mark.anyio
    async def test_method_not_allowed_sets_allow(self) -> None:
        response = await TestClient(_router()).put("/b")
        assert response.status == 405
        assert response.header("allow") == "GET, HEAD, POST"

    @pytest.mark.anyio
    async def test_redirect_to_slash_form(self) -> None:
        response = await TestClient(_router()).get("/d?page=2")
        assert response.status == 301
        assert response.header("location") == "/d/?page=2"
        assert response.text == ""

    @pytest.mark.anyio
    async def test_head_sends_length_without_body(self) -> None:
        response = await TestClient(_router()).head("/")
        assert response.status == 200
        assert response.body == b""
        assert response.header("content-length") == "4"

    @pytest.mark.anyio
    async def test_none_is_no_content(self) -> None:
        response = await TestClient(_router()).get("/empty")
        assert response.status == 204
        assert response.body == b""

    @pytest.mark.anyio
    async def test_bytes_are_octet_stream(self) -> None:
        response = await TestClient(_router()).get("/raw")
        assert response.content_type == "application/octet-stream"
        assert response.body == b"\x00\x01"

    @pytest.mark.anyio
    async def test_post_body_reaches_handler(self) -> None:
        router = Router()

        async def echo(request: Request) -> str:
            data = await request.json()
            return f"{request.content_type} {data['n']}"

        router.register("/echo", "POST", echo)
        response = await TestClient(router).post("/echo", json={"n": 3})
        assert response.text == "application/json 3"

    @pytest.mark.anyio
    async def test_host_routing_through_client(self) -> None:
        blog = Router()
        blog.register("/", "GET", lambda request: f"blog of {request.params['user']}")
        hosts = HostRouter(_router())
        hosts.register("<user>.blog.example", blog)
        client = TestClient(hosts)

        assert (await client.get("http://ann.blog.example/")).text == "blog of ann"
        assert (await client.get("http://example.org/")).text == "home"
        assert (await client.get("/")).text == "home"


class TestErrorResponder:
    @pytest.mark.anyio
    async def test_custom_responder_for_404(self) -> None:
        def responder(request: Request, status: int, message: str) -> Response:
            return Response(
                f"<h1>{status} {message}</h1><p>{request.path}</p>",
                content_type="text/html",
            )

        client = TestClient(App(_router(), error_responder=responder))
        response = await client.get("/missing")
        assert response.status == 404
        assert response.content_type == "text/html"
        assert response.text == "<h1>404 Not Found</h1><p>/missing</p>"

    @pytest.mark.anyio
    async def test_custom_responder_keeps_allow_header(self) -> None:
        async def responder(request: Request, status: int, message: str) -> str:
            return f"nope: {status}"

        client = TestClient(App(_router(), error_responder=responder))
        response = await client.delete("/b")
        assert response.status == 405
        assert response.text == "nope: 405"
        assert response.header("allow") == "GET, HEAD, POST"

    @pytest.mark.anyio
    async def test_responder_may_choose_status(self) -> None:
        def responder(request: Request, status: int, message: str) -> Response:
            return Response("gone", status=410)

        client = TestClient(App(_router(), error_responder=responder))
        assert (await client.get("/missing")).status == 410

    @pytest.mark.anyio
    async def test_http_error_raised_by_handler(self) -> None:
        router = Router()

        def teapot(request: Request) -> str:
            raise HTTPError(status=418, detail="I'm a teapot")

        router.register("/tea", "GET", teapot)
        response = await TestClient(router).get("/tea")
        assert response.status == 418
        assert response.text == "I'm a teapot\n"

    @pytest.mark.anyio
    async def test_apps_do_not_share_responders(self) -> None:
        custom = App(_router(), error_responder=lambda request, status, message: "custom")
        plain = App(_router())

        assert (await TestClient(custom).get("/missing")).text == "custom"
        assert (await TestClient(plain).get("/missing")).text == "Not Found\n"


class TestInternalErrors:
    @staticmethod
    def _failing_router() -> Router:
        router = Router()

        def boom(request: Request) -> str:
            msg = "kaboom"
            raise ValueError(msg)

        router.register("/boom", "GET", boom)
        return router

    @pytest.mark.anyio
    async def test_500_hides_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="perch.server"):
            response = await TestClient(self._failing_router()).get("/boom")
        assert response.status == 500
        assert response.text == "Internal Server Error\n"
        assert "500 GET /boom" in caplog.text
        assert "kaboom" in caplog.text

    @pytest.mark.anyio
    async def test_debug_shows_traceback(self) -> None:
        app = App(self._failing_router(), config=AppConfig(debug=True))
        response = await TestClient(app).get("/boom")
        assert response.status == 500
        assert "ValueError: kaboom" in response.text

    @pytest.mark.anyio
    async def test_unsupported_return_type_is_500(self) -> None:
        router = Router()
        router.register("/n", "GET", lambda request: 42)
        assert (await TestClient(router).get("/n")).status == 500


class TestASGI:
    @pytest.mark.anyio
    async def test_lifespan(self) -> None:
        incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(incoming)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await App(_router())({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    @pytest.mark.anyio
    async def test_ignores_other_scopes(self) -> None:
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await App(_router())({"type": "websocket"}, receive, send)
        assert sent == []

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("path", "raw_path", "location"),
        [
            ("/f/a?b", b"/f/a%3Fb", b"/f/a%3Fb/"),
            ("/f/日", b"/f/%E6%97%A5", b"/f/%E6%97%A5/"),
        ],
    )
    async def test_redirect_location_encodes_decoded_path(
        self, path: str, raw_path: bytes, location: bytes
    ) -> None:
        router = Router()
        router.register("/f/<x>/", "GET", lambda request: request.params["x"])
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "GET",
            "path": path,
            "raw_path": raw_path,
            "query_string": b"page=2",
            "root_path": "",
            "headers": [],
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await App(router)(scope, receive, send)
        assert sent[0]["status"] == 301
        assert (b"location", location + b"?page=2") in sent[0]["headers"]
