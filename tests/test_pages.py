import pytest
from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates
from fastapi.testclient import TestClient

from webseed.api.deps import get_templates
from webseed.api.pages import EXAMPLE_ERROR_MESSAGE
from webseed.templating import render_page


def test_homepage(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "Welcome to the Web Seed" in r.text
    assert "NOT_STARTED" in r.text
    assert "seed-under-test v9.9.9" in r.text


def test_charts_page(client):
    r = client.get("/charts")
    assert r.status_code == 200
    assert '<canvas id="seed-chart">' in r.text
    assert "/assets/js/charts.js" in r.text


def test_error_page(client):
    r = client.get("/error")
    assert r.status_code == 500
    assert EXAMPLE_ERROR_MESSAGE in r.text
    assert "Error 500" in r.text


def test_undefined_path_is_not_found(client):
    assert client.get("/does-not-exist").status_code == 404


def test_wrong_method_is_rejected(client):
    assert client.post("/").status_code == 405


def test_request_id_is_propagated(client):
    r = client.get("/", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in r.headers
    assert r.headers["X-Content-Type-Options"] == "nosniff"


@pytest.fixture()
def broken_template_client(builder):
    router = APIRouter()

    @router.get("/broken")
    async def broken(request: Request, templates: Jinja2Templates = Depends(get_templates)):
        return render_page(templates, request, "no-such-template.html")

    return TestClient(builder.with_route_group(router).build().api)


def test_missing_template_is_ui_error(broken_template_client):
    r = broken_template_client.get("/broken")
    assert r.status_code == 500
    assert r.text == "Failed to render page"
