"""
Tests for the FastAPI routes.

Services are replaced through dependency_overrides. Only the WebSocket test
starts the app lifespan, with the store patched out.
"""

import pytest
from unittest.mock import AsyncMock, Mock, patch
from fastapi.testclient import TestClient

from rnd_jobs.main import app
from rnd_jobs.database.models import TaskDB
from rnd_jobs.services.notifier import NotificationHub, get_notification_hub
from rnd_jobs.services.tasks import TaskService, get_task_service
from rnd_jobs.services.crew import get_crew_service
from rnd_jobs.services.clients import get_client_service
from rnd_jobs.services.email_ingest import (
    get_email_ingestion_service,
    UnauthorizedSenderError,
    UnrecognizedMessageError,
)
from rnd_jobs.database.repositories.settings import get_settings_repository
from rnd_jobs.integrations.sheets import get_spreadsheet_mirror
from rnd_jobs.integrations.google_oauth import get_google_oauth_client, OAuthExchangeError


@pytest.fixture
def client():
    """Create test client."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_task_service():
    service = Mock()
    service.list_tasks = AsyncMock(return_value=[{"id": 2, "title": "SPK-2", "clientName": "Acme"}])
    service.create_task = AsyncMock(return_value=7)
    service.update_task = AsyncMock(return_value=1)
    service.delete_task = AsyncMock(return_value=0)
    service.run_post_commit_hooks = AsyncMock()
    app.dependency_overrides[get_task_service] = lambda: service
    return service


@pytest.fixture
def mock_crew_service():
    service = Mock()
    service.list_crew = AsyncMock(return_value=[{"id": 1, "name": "Ahmad", "tenure": "Senior"}])
    service.create_crew = AsyncMock(return_value=3)
    service.delete_crew = AsyncMock(return_value=1)
    app.dependency_overrides[get_crew_service] = lambda: service
    return service


@pytest.fixture
def mock_client_service():
    service = Mock()
    service.list_clients = AsyncMock(return_value=[{"id": 1, "name": "Acme"}])
    service.create_client = AsyncMock(return_value=1)
    app.dependency_overrides[get_client_service] = lambda: service
    return service


@pytest.fixture
def mock_ingestion():
    service = Mock()
    service.ingest = AsyncMock()
    app.dependency_overrides[get_email_ingestion_service] = lambda: service
    return service


@pytest.fixture
def mock_sheets():
    settings_repo = Mock()
    settings_repo.get = AsyncMock(side_effect=lambda key: {"spreadsheet_id": "sheet-1"}.get(key))
    settings_repo.set = AsyncMock()
    mirror = Mock()
    mirror.is_connected = AsyncMock(return_value=False)
    mirror.request_sync = AsyncMock()
    mirror.sync = AsyncMock(return_value=False)
    app.dependency_overrides[get_settings_repository] = lambda: settings_repo
    app.dependency_overrides[get_spreadsheet_mirror] = lambda: mirror
    return settings_repo, mirror


@pytest.fixture
def mock_oauth():
    oauth = Mock()
    oauth.get_auth_url = Mock(return_value="https://accounts.google.com/o/oauth2/v2/auth?x=1")
    oauth.exchange_code = AsyncMock(return_value={"access_token": "t"})
    app.dependency_overrides[get_google_oauth_client] = lambda: oauth
    return oauth


# ==================== HEALTH ====================

class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_reports_database(self, client):
        db = Mock()
        db.health_check = AsyncMock(return_value={"status": "healthy"})
        with patch("rnd_jobs.main.get_database", return_value=db):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["database"] == "healthy"


# ==================== TASKS ====================

class TestTaskRoutes:

    def test_list(self, client, mock_task_service):
        response = client.get("/api/tasks")

        assert response.status_code == 200
        assert response.json()[0]["clientName"] == "Acme"

    def test_create_maps_camel_case_and_defaults(self, client, mock_task_service):
        response = client.post("/api/tasks", json={"title": " SPK-9 ", "clientName": "Acme", "status": ""})

        assert response.status_code == 200
        assert response.json() == {"id": 7}
        (fields,) = mock_task_service.create_task.await_args.args
        assert fields["title"] == "SPK-9"
        assert fields["client_name"] == "Acme"
        assert fields["status"] == "To Do"
        assert fields["priority"] == "Medium"
        assert fields["category"] == "Produk"
        assert fields["stage"] == "Inbox"

    def test_create_rejects_unknown_status(self, client, mock_task_service):
        response = client.post("/api/tasks", json={"title": "SPK-9", "status": "Parked"})

        assert response.status_code == 422
        mock_task_service.create_task.assert_not_awaited()

    def test_create_accepts_any_stage(self, client, mock_task_service):
        response = client.post("/api/tasks", json={"title": "SPK-9", "category": "Motif", "stage": "Render"})

        assert response.status_code == 200
        assert mock_task_service.create_task.await_args.args[0]["stage"] == "Render"

    def test_create_requires_title(self, client, mock_task_service):
        assert client.post("/api/tasks", json={"title": "   "}).status_code == 422
        assert client.post("/api/tasks", json={"clientName": "Acme"}).status_code == 422

    def test_update(self, client, mock_task_service):
        response = client.put("/api/tasks/5", json={"title": "SPK-5", "status": "Done"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        task_id, fields = mock_task_service.update_task.await_args.args
        assert task_id == 5
        assert fields["status"] == "Done"

    def test_delete_missing_id_still_succeeds(self, client, mock_task_service):
        response = client.delete("/api/tasks/404")

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_store_failure_returns_500(self, mock_task_service):
        mock_task_service.list_tasks.side_effect = RuntimeError("disk I/O error")
        client = TestClient(app, raise_server_exceptions=False)
        try:
            response = client.get("/api/tasks")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

    def test_categories(self, client):
        response = client.get("/api/categories")

        assert response.status_code == 200
        assert response.json()["Drafter"][0] == "Inbox"


# ==================== CREW & CLIENTS ====================

class TestCrewAndClientRoutes:

    def test_list_crew(self, client, mock_crew_service):
        assert client.get("/api/crew").json()[0]["tenure"] == "Senior"

    def test_create_crew(self, client, mock_crew_service):
        response = client.post(
            "/api/crew",
            json={"name": "Dewi", "role": "Drafter", "joinDate": "2023-08-01", "performance": ""},
        )

        assert response.json() == {"id": 3}
        (fields,) = mock_crew_service.create_crew.await_args.args
        assert fields["join_date"] == "2023-08-01"
        assert fields["performance"] == 0

    def test_create_crew_requires_role(self, client, mock_crew_service):
        assert client.post("/api/crew", json={"name": "Dewi"}).status_code == 422

    def test_create_crew_rejects_out_of_range_performance(self, client, mock_crew_service):
        response = client.post("/api/crew", json={"name": "Dewi", "role": "Drafter", "performance": 150})
        assert response.status_code == 422

    def test_delete_crew(self, client, mock_crew_service):
        assert client.delete("/api/crew/1").json() == {"success": True}
        mock_crew_service.delete_crew.assert_awaited_once_with(1)

    def test_clients(self, client, mock_client_service):
        assert client.get("/api/clients").json() == [{"id": 1, "name": "Acme"}]
        assert client.post("/api/clients", json={"name": "Acme"}).json() == {"id": 1}
        mock_client_service.create_client.assert_awaited_once_with("Acme")

    def test_seed_broadcasts(self, client, mock_task_service):
        with patch("rnd_jobs.web.api.seed_sample_data", new=AsyncMock(return_value={"crew": 5})):
            response = client.post("/api/seed")

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_task_service.run_post_commit_hooks.assert_awaited_once()


# ==================== EMAIL WEBHOOK ====================

class TestEmailWebhook:

    def test_success(self, client, mock_ingestion):
        mock_ingestion.ingest.return_value = {
            "success": True,
            "taskId": 12,
            "message": "Task created automatically from email: SPK-2024-088",
        }

        response = client.post(
            "/api/webhooks/email",
            json={"from": "marketing@kriyanusantara.com", "subject": "SPK", "body": "Kode: SPK-2024-088"},
        )

        assert response.status_code == 200
        assert response.json()["taskId"] == 12
        mock_ingestion.ingest.assert_awaited_once_with(
            "marketing@kriyanusantara.com", "SPK", "Kode: SPK-2024-088"
        )

    def test_unauthorized_sender(self, client, mock_ingestion):
        mock_ingestion.ingest.side_effect = UnauthorizedSenderError("Unauthorized sender")

        response = client.post("/api/webhooks/email", json={"from": "x@example.com", "subject": "SPK"})

        assert response.status_code == 403
        assert response.json() == {"error": "Unauthorized sender"}

    def test_not_a_work_order(self, client, mock_ingestion):
        mock_ingestion.ingest.side_effect = UnrecognizedMessageError("Not an SPK/SPD email")

        response = client.post(
            "/api/webhooks/email",
            json={"from": "marketing@kriyanusantara.com", "subject": "Hi", "body": ""},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Not an SPK/SPD email"}


# ==================== SHEETS & OAUTH ====================

class TestSheetsRoutes:

    def test_get_settings(self, client, mock_sheets):
        response = client.get("/api/settings/spreadsheet")

        assert response.json() == {"spreadsheetId": "sheet-1", "lastSync": None, "isConnected": False}

    def test_update_settings_triggers_sync(self, client, mock_sheets):
        settings_repo, mirror = mock_sheets

        response = client.post("/api/settings/spreadsheet", json={"spreadsheetId": "sheet-2"})

        assert response.json() == {"success": True}
        settings_repo.set.assert_awaited_once_with("spreadsheet_id", "sheet-2")
        mirror.request_sync.assert_awaited_once()

    def test_manual_sync(self, client, mock_sheets):
        assert client.post("/api/settings/spreadsheet/sync").json() == {"success": False}

    def test_auth_url(self, client, mock_oauth):
        response = client.get("/api/auth/google/url")

        assert response.json() == {"url": "https://accounts.google.com/o/oauth2/v2/auth?x=1"}

    def test_callback_success(self, client, mock_oauth):
        response = client.get("/auth/google/callback", params={"code": "4/abc"})

        assert response.status_code == 200
        assert "OAUTH_AUTH_SUCCESS" in response.text
        mock_oauth.exchange_code.assert_awaited_once_with("4/abc")

    def test_callback_failure(self, client, mock_oauth):
        mock_oauth.exchange_code.side_effect = OAuthExchangeError("invalid_grant")

        response = client.get("/auth/google/callback", params={"code": "bad"})

        assert response.status_code == 500
        assert response.text == "Authentication failed"


# ==================== WEBSOCKET ====================

class TestRealtime:
    """The lifespan runs here (one event loop for HTTP and /ws); the store is patched out."""

    def test_ws_receives_task_updates(self):
        hub = NotificationHub()
        repo = Mock()
        repo.create = AsyncMock(return_value=Mock(id=1))
        repo.get_all = AsyncMock(return_value=[TaskDB(id=1, title="SPK-1", status="To Do")])
        app.dependency_overrides[get_notification_hub] = lambda: hub
        app.dependency_overrides[get_task_service] = lambda: TaskService(repo, hub)

        try:
            with patch("rnd_jobs.main.init_database", new=AsyncMock(return_value=False)), \
                    patch("rnd_jobs.main.close_database", new=AsyncMock()), \
                    TestClient(app) as live:
                with live.websocket_connect("/ws") as ws:
                    # Binary frames from the board are ignored, not fatal
                    ws.send_bytes(b"\x00ping")
                    response = live.post("/api/tasks", json={"title": "SPK-1"})
                    message = ws.receive_json()
                    connected = len(hub.active_connections)

                disconnected = len(hub.active_connections)
        finally:
            app.dependency_overrides.clear()

        assert response.json() == {"id": 1}
        assert connected == 1
        assert message["event"] == "tasks_updated"
        assert message["data"][0]["id"] == 1
        assert message["data"][0]["title"] == "SPK-1"
        assert disconnected == 0
