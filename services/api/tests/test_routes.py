"""Route table registration."""

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route
from starlette.testclient import TestClient

from reqecho_api import controller
from reqecho_api.main import create_app
from reqecho_api.orjson_response import ORJSONResponse
from reqecho_api.routes import ECHO_ROUTES, RouteSpec, build_routes


def test_route_table() -> None:
    table = {(spec.path, spec.name) for spec in ECHO_ROUTES}
    assert table == {
        ("/get/query-params", "get.queryParams"),
        ("/get/headers", "get.headers"),
        ("/get/scopes", "get.scopes"),
    }
    assert all(spec.methods == ("GET",) for spec in ECHO_ROUTES)


def test_build_routes_names_and_paths() -> None:
    routes = build_routes()
    assert [(r.path, r.name) for r in routes] == [
        (spec.path, spec.name) for spec in ECHO_ROUTES
    ]
    assert all("GET" in r.methods for r in routes)


def test_duplicate_path_rejected() -> None:
    specs = (
        RouteSpec("/get/headers", "a", controller.headers),
        RouteSpec("/get/headers", "b", controller.headers),
    )
    with pytest.raises(ValueError, match="Duplicate route path"):
        build_routes(specs)


def test_duplicate_name_rejected() -> None:
    specs = (
        RouteSpec("/one", "same", controller.headers),
        RouteSpec("/two", "same", controller.headers),
    )
    with pytest.raises(ValueError, match="Duplicate route name"):
        build_routes(specs)


def test_url_for_route_names() -> None:
    async def links(request: Request) -> ORJSONResponse:
        return ORJSONResponse(
            {spec.name: request.url_for(spec.name).path for spec in ECHO_ROUTES}
        )

    app = Starlette(routes=build_routes() + [Route("/links", links)])
    resp = TestClient(app).get("/links")
    assert resp.json() == {
        "get.queryParams": "/get/query-params",
        "get.headers": "/get/headers",
        "get.scopes": "/get/scopes",
    }


def test_scopes_without_middleware_are_empty() -> None:
    app = Starlette(routes=build_routes())
    resp = TestClient(app).get("/get/scopes")
    assert resp.status_code == 200
    assert resp.json() == []


def test_custom_spec_receives_context() -> None:
    def names_upper(request, context):
        return [name.upper() for name in context.names]

    app = create_app((RouteSpec("/upper", "upper", names_upper),), scopes=("http",))
    resp = TestClient(app).get("/upper")
    assert resp.json() == ["HTTP"]
