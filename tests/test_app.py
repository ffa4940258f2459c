"""Application-level endpoint tests: UI page, catalog and health check."""

from pathlib import Path

import pytest

from image_studio.core.database import create_db_engine


@pytest.mark.asyncio
class TestPages:
    async def test_index_serves_composer_page(self, unconfigured_client):
        response = await unconfigured_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'id="generate"' in response.text
        assert "/api/history" in response.text

    async def test_index_has_share_button_copying_page_url(self, unconfigured_client):
        response = await unconfigured_client.get("/")

        assert 'id="share"' in response.text
        assert "navigator.clipboard.writeText(window.location.href)" in response.text

    async def test_options_lists_catalog(self, unconfigured_client):
        response = await unconfigured_client.get("/api/options")

        assert response.status_code == 200
        data = response.json()
        assert [m["id"] for m in data["models"]] == ["flux-pro", "flux-dev", "flux-schnell"]
        assert data["aspects"] == ["1:1", "3:4", "4:3", "16:9"]
        assert "Watercolor" in data["stylePresets"]
        assert data["defaults"] == {
            "modelId": "flux-pro",
            "aspect": "1:1",
            "resolution": 768,
            "cfg": 7.0,
            "steps": 30,
            "numImages": 4,
        }


@pytest.mark.asyncio
class TestHealth:
    async def test_healthy_without_database(self, unconfigured_client):
        response = await unconfigured_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "disabled"}

    async def test_healthy_with_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "configured"}

    async def test_unhealthy_when_database_unreachable(self, unconfigured_client, tmp_path):
        from image_studio.app import app
        from image_studio.core.database import setup_db_session

        missing_dir = Path(tmp_path) / "missing" / "history.db"
        engine = create_db_engine(f"sqlite+aiosqlite:///{missing_dir}")
        app.state.session_factory = setup_db_session(engine)
        try:
            response = await unconfigured_client.get("/health")
        finally:
            await engine.dispose()

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


def test_auth_token_becomes_url_password():
    engine = create_db_engine(
        "postgresql+psycopg://studio@db.example:5432/studio", auth_token="s3cret", pool_size=2
    )

    assert engine.url.password == "s3cret"
    assert engine.pool.size() == 2
