import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from sessionflash.errors import register_exception_handlers
from sessionflash.flash import SessionUnavailableError
from sessionflash.main import create_app
from sessionflash.routes import infra
from sessionflash.utils.messages import flash_store


@pytest.mark.anyio
async def test_404_custom_page() -> None:
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        resp = await ac.get("/this-does-not-exist")

    assert resp.status_code == 404
    assert "Page not found" in resp.text


@pytest.mark.anyio
async def test_500_custom_page_non_prod(monkeypatch) -> None:
    monkeypatch.setenv("FLASH_ENV", "test")
    monkeypatch.setenv("FLASH_DEBUG", "false")

    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        resp = await ac.get("/debug/error")

    assert resp.status_code == 500
    assert "Server error" in resp.text


@pytest.mark.anyio
async def test_422_on_bad_query() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/demo/flash?remove_after_access=maybe")

    assert resp.status_code == 422
    assert "Invalid request" in resp.text


def test_flash_store_requires_session() -> None:
    request = Request({"type": "http", "headers": []})
    with pytest.raises(SessionUnavailableError):
        flash_store(request)


@pytest.mark.anyio
async def test_missing_session_middleware_renders_500() -> None:
    app = FastAPI()
    app.include_router(infra.router)
    register_exception_handlers(app)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        resp = await ac.get("/demo/flash/keys")

    assert resp.status_code == 500
    assert "Server error" in resp.text


@pytest.mark.anyio
async def test_http_error_json_for_json_clients() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/health", headers={"Accept": "application/json"})

    assert resp.status_code == 405
    assert resp.json() == {"detail": "Method Not Allowed", "status_code": 405}


@pytest.mark.anyio
async def test_http_error_html_for_htmx_clients() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/health", headers={"Accept": "application/json", "HX-Request": "true"}
        )

    assert resp.status_code == 405
    assert "Status 405" in resp.text


@pytest.mark.anyio
async def test_http_error_html_page() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/health")

    assert resp.status_code == 405
    assert "text/html" in resp.headers["content-type"]
    assert "Status 405" in resp.text


@pytest.mark.anyio
async def test_debug_error_hidden_in_prod(monkeypatch) -> None:
    monkeypatch.setenv("FLASH_ENV", "prod")

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/debug/error")

    assert resp.status_code == 404
    assert "Page not found" in resp.text
