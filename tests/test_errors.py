import errno

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from pydantic import BaseModel

from webseed.errors import (
    AppError,
    AppErrorKind,
    ErrorPage,
    classify_os_error,
    render_error_page,
    to_error_page,
)

EXPECTED_STATUS = {
    AppErrorKind.UI_ERROR: 500,
    AppErrorKind.JSON_ERROR: 400,
    AppErrorKind.FILE_NOT_FOUND: 404,
    AppErrorKind.UNKNOWN: 500,
}


@pytest.mark.parametrize("kind", list(AppErrorKind))
def test_every_kind_maps_to_its_status(kind):
    page = to_error_page(AppError(kind))
    assert page.status_code == EXPECTED_STATUS[kind]
    assert page.status_code in {400, 404, 500}
    assert page.error


def test_mapping_is_stable_and_ignores_detail():
    first = to_error_page(AppError(AppErrorKind.JSON_ERROR, detail="line 1"))
    second = to_error_page(AppError(AppErrorKind.JSON_ERROR, detail="line 2"))
    assert first == second


def test_str_uses_kind_message():
    assert str(AppError(AppErrorKind.FILE_NOT_FOUND, detail="/tmp/x")) == "File not found"


def test_classify_not_found():
    assert classify_os_error(FileNotFoundError("missing")).kind is AppErrorKind.FILE_NOT_FOUND
    assert classify_os_error(OSError(errno.ENOENT, "gone")).kind is AppErrorKind.FILE_NOT_FOUND


def test_classify_other_io_failures_as_unknown():
    assert classify_os_error(PermissionError("denied")).kind is AppErrorKind.UNKNOWN
    assert classify_os_error(OSError(errno.EIO, "io")).kind is AppErrorKind.UNKNOWN


def test_render_error_page_is_plain_text():
    response = render_error_page(ErrorPage(status_code=404, error="File not found"))
    assert response.status_code == 404
    assert response.body == b"File not found"
    assert response.media_type == "text/plain"


class Payload(BaseModel):
    name: str


def _failing_routes() -> APIRouter:
    router = APIRouter(prefix="/test-errors")

    @router.get("/ui")
    async def ui_failure():
        raise AppError(AppErrorKind.UI_ERROR, detail="template exploded")

    @router.get("/io")
    async def io_failure():
        raise PermissionError("no access")

    @router.get("/missing")
    async def missing_file():
        with open("/definitely/not/here.txt", "rb") as handle:
            return handle.read()

    @router.post("/json")
    async def json_input(payload: Payload):
        return {"name": payload.name}

    @router.get("/boom")
    async def unexpected():
        raise RuntimeError("unexpected")

    return router


@pytest.fixture()
def error_client(builder):
    application = builder.with_route_group(_failing_routes()).build()
    return TestClient(application.api, raise_server_exceptions=False)


def test_app_error_becomes_error_page(error_client):
    r = error_client.get("/test-errors/ui")
    assert r.status_code == 500
    assert r.text == "Failed to render page"
    assert "template exploded" not in r.text


def test_os_errors_are_classified(error_client):
    assert error_client.get("/test-errors/io").status_code == 500
    r = error_client.get("/test-errors/missing")
    assert r.status_code == 404
    assert r.text == "File not found"


def test_malformed_json_is_bad_request(error_client):
    r = error_client.post(
        "/test-errors/json", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.text == "Malformed JSON input"

    ok = error_client.post("/test-errors/json", json={"name": "seed"})
    assert ok.status_code == 200
    assert ok.json() == {"name": "seed"}


def test_unexpected_exception_is_unknown(error_client):
    r = error_client.get("/test-errors/boom")
    assert r.status_code == 500
    assert r.text == "Unknown application error"
