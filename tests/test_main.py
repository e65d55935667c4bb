from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture(name="bare_client")
def bare_client_fixture():
    return TestClient(app)


class TestAppConfiguration:
    def test_app_title(self):
        assert app.title == "Gestao API"

    def test_cors_middleware_configured(self):
        middleware_types = [m.cls.__name__ for m in app.user_middleware]  # type: ignore[attr-defined]
        assert "CORSMiddleware" in middleware_types


class TestHealthEndpoint:
    def test_health_ok(self, bare_client: TestClient):
        response = bare_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_not_in_schema(self, bare_client: TestClient):
        paths = bare_client.get("/openapi.json").json()["paths"]
        assert "/health" not in paths


class TestRouterInclusion:
    def test_expected_paths_in_schema(self, bare_client: TestClient):
        paths = bare_client.get("/openapi.json").json()["paths"]
        for path in (
            "/auth/register",
            "/auth/token",
            "/auth/refresh",
            "/users/me",
            "/tasks/",
            "/prospects/",
            "/implementations/",
            "/implementations/{implementation_id}/billings",
            "/dashboard/",
            "/dashboard/recurrence",
        ):
            assert path in paths, path


class TestLifespanEvents:
    @patch("app.main.setup_telemetry")
    @patch("app.main.create_db_and_tables")
    @patch("app.main.setup_logging")
    def test_lifespan_runs_setup(self, mock_logging, mock_db, mock_telemetry):
        import asyncio

        from app.main import lifespan

        mock_app = Mock()

        async def _run():
            async with lifespan(mock_app):
                pass

        asyncio.run(_run())

        mock_logging.assert_called_once()
        mock_db.assert_called_once()
        mock_telemetry.assert_called_once_with(mock_app)
