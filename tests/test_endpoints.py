"""
HTTP-level tests for the shortlink application.

Each test gets its own data file and static directory through the
fixtures in conftest.py.
"""

import re

import httpx
import pytest
from fastapi.testclient import TestClient

from shortlink.core.setting import Settings
from shortlink.main import create_app

SHORT_URL = re.compile(r"^http://testserver/([0-9a-f]{8})$")


class TestStaticAssets:
    """Test landing page and stylesheet."""

    def test_landing_page(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "landing" in response.text

    def test_stylesheet(self, client):
        response = client.get("/style.css")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")
        assert "color: black" in response.text

    def test_missing_asset_is_server_error(self, settings, tmp_path):
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()
        app = create_app(settings.model_copy(update={"STATIC_DIR": empty_dir}))

        with TestClient(app) as client:
            for path in ("/", "/style.css"):
                response = client.get(path)
                assert response.status_code == 500
                assert response.headers["content-type"].startswith("text/plain")
                assert response.text == "500 Internal Server Error"

    def test_bundled_assets_are_served(self, data_file):
        """The default STATIC_DIR points at the packaged landing page."""
        app = create_app(Settings(DATA_FILE=data_file))

        with TestClient(app) as client:
            assert client.get("/").status_code == 200
            assert "innerHTML" not in client.get("/").text
            assert client.get("/style.css").status_code == 200


class TestShorten:
    """Test POST /shorten."""

    def test_round_trip(self, client):
        response = client.post("/shorten", json={"url": "https://example.com/long", "shortCode": "ex"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"success": True, "shortUrl": "http://testserver/ex"}

        redirect = client.get("/ex")
        assert redirect.status_code == 302
        assert redirect.headers["location"] == "https://example.com/long"
        assert redirect.content == b""

    def test_auto_generated_code(self, client):
        response = client.post("/shorten", json={"url": "https://example.com/auto"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        match = SHORT_URL.match(body["shortUrl"])
        assert match, body["shortUrl"]

        redirect = client.get(f"/{match.group(1)}")
        assert redirect.status_code == 302
        assert redirect.headers["location"] == "https://example.com/auto"

    def test_empty_short_code_is_generated(self, client):
        response = client.post("/shorten", json={"url": "https://example.com", "shortCode": ""})

        assert response.status_code == 200
        assert SHORT_URL.match(response.json()["shortUrl"])

    def test_duplicate_code_rejected(self, client, stored_links):
        client.post("/shorten", json={"url": "https://first.example.com", "shortCode": "dup"})

        response = client.post("/shorten", json={"url": "https://second.example.com", "shortCode": "dup"})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert "already exists" in response.text
        assert stored_links() == {"dup": "https://first.example.com"}
        assert client.get("/dup").headers["location"] == "https://first.example.com"

    @pytest.mark.parametrize("payload", [{}, {"url": ""}, {"shortCode": "abc"}])
    def test_url_required(self, client, stored_links, payload):
        client.post("/shorten", json={"url": "https://keep.example.com", "shortCode": "keep"})

        response = client.post("/shorten", json=payload)

        assert response.status_code == 400
        assert response.text == "URL is required"
        assert stored_links() == {"keep": "https://keep.example.com"}

    def test_save_failure_is_server_error(self, client, data_file, stored_links, monkeypatch):
        client.post("/shorten", json={"url": "https://keep.example.com", "shortCode": "keep"})

        def fail_replace(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("shortlink.db.json_store.os.replace", fail_replace)
        response = client.post("/shorten", json={"url": "https://new.example.com", "shortCode": "new"})

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        assert stored_links() == {"keep": "https://keep.example.com"}
        assert [p.name for p in data_file.parent.iterdir()] == ["links.json"]

    @pytest.mark.asyncio
    async def test_body_delivered_in_chunks(self, settings, stored_links):
        """The handler waits for the last chunk before parsing."""
        chunks = [b'{"url": "https://exa', b'mple.com/chunked", ', b'"shortCode": "chunk"}']

        async def body():
            for chunk in chunks:
                yield chunk

        transport = httpx.ASGITransport(app=create_app(settings))
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.post(
                "/shorten",
                content=body(),
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 200
        assert response.json()["shortUrl"] == "http://testserver/chunk"
        assert stored_links() == {"chunk": "https://example.com/chunked"}

    @pytest.mark.parametrize("body", [b"{not json", b"", b'{"url": 42}'])
    def test_malformed_body_is_server_error(self, client, body):
        response = client.post(
            "/shorten",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Internal Server Error"

    def test_base_url_setting(self, settings):
        app = create_app(settings.model_copy(update={"BASE_URL": "https://sho.rt/"}))

        with TestClient(app) as client:
            response = client.post("/shorten", json={"url": "https://example.com", "shortCode": "ex"})

        assert response.json()["shortUrl"] == "https://sho.rt/ex"

    def test_malformed_store_is_server_error(self, client, data_file):
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text("{broken", encoding="utf-8")

        response = client.post("/shorten", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert data_file.read_text(encoding="utf-8") == "{broken"


class TestRedirect:
    """Test GET lookups."""

    def test_lazy_initialization(self, client, data_file, stored_links):
        assert not data_file.exists()

        response = client.get("/anything")

        assert response.status_code == 404
        assert response.text == "404 Not Found"
        assert stored_links() == {}

    def test_unknown_code(self, client):
        client.post("/shorten", json={"url": "https://example.com", "shortCode": "known"})

        response = client.get("/not-a-real-code")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/plain")

    def test_no_trailing_slash_or_case_folding(self, client):
        client.post("/shorten", json={"url": "https://example.com", "shortCode": "Case"})

        assert client.get("/case").status_code == 404
        assert client.get("/Case/").status_code == 404
        assert client.get("/Case").status_code == 302

    def test_code_containing_slash(self, client):
        client.post("/shorten", json={"url": "https://example.com/nested", "shortCode": "a/b"})

        response = client.get("/a/b")

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/nested"

    def test_location_is_stored_target_verbatim(self, client):
        target = "https://example.com/a b|{x}"
        client.post("/shorten", json={"url": target, "shortCode": "raw"})

        response = client.get("/raw")

        assert response.status_code == 302
        assert response.headers["location"] == target

    def test_non_latin1_target_still_redirects(self, client):
        client.post("/shorten", json={"url": "https://example.com/check✓", "shortCode": "uni"})

        response = client.get("/uni")

        assert response.status_code == 302
        assert response.headers["location"].startswith("https://example.com/check")

    def test_malformed_store_is_server_error(self, client, data_file):
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text("[]", encoding="utf-8")

        response = client.get("/anything")

        assert response.status_code == 500
        assert response.text == "500 Internal Server Error"


class TestMethodNotAllowed:
    """Test unsupported method/path combinations."""

    @pytest.mark.parametrize("method, path", [
        ("DELETE", "/shorten"),
        ("PUT", "/shorten"),
        ("POST", "/"),
        ("POST", "/some-code"),
        ("DELETE", "/some-code"),
    ])
    def test_method_not_allowed(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 405
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "405 Method Not Allowed"

    def test_cors_preflight_is_not_allowed(self, client):
        response = client.options(
            "/shorten",
            headers={
                "Origin": "https://elsewhere.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 405
        assert response.text == "405 Method Not Allowed"
        assert "access-control-allow-origin" not in response.headers

    def test_get_shorten_is_a_lookup(self, client):
        """GET /shorten is treated as an unknown short code."""
        assert client.get("/shorten").status_code == 404


class TestLoggingMiddleware:
    """Test request logging."""

    def test_process_time_header(self, client):
        response = client.get("/")

        assert "x-process-time" in response.headers
        assert float(response.headers["x-process-time"]) >= 0

    def test_request_is_logged(self, client, caplog):
        with caplog.at_level("INFO", logger="shortlink"):
            client.get("/missing", headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

        assert any(
            "GET /missing 404" in record.getMessage() and "IP:203.0.113.7" in record.getMessage()
            for record in caplog.records
        )
