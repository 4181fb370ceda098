"""
Pytest configuration and shared fixtures.
"""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, Mock

from rnd_jobs.database.connection import Database
from rnd_jobs.database.repositories.tasks import TaskRepository
from rnd_jobs.database.repositories.crew import CrewRepository
from rnd_jobs.database.repositories.clients import ClientRepository
from rnd_jobs.database.repositories.settings import SettingsRepository

# Configure pytest-asyncio
pytest_plugins = ('pytest_asyncio',)


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh single-file SQLite store per test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'rnd_tasks.db'}", null_pool=True)
    assert await db.initialize()
    yield db
    await db.close()


@pytest.fixture
def task_repo(database):
    return TaskRepository(database)


@pytest.fixture
def crew_repo(database):
    return CrewRepository(database)


@pytest.fixture
def client_repo(database):
    return ClientRepository(database)


@pytest.fixture
def settings_repo(database):
    return SettingsRepository(database)


@pytest.fixture
def mock_hub():
    """Notification hub that records broadcasts instead of sending them."""
    hub = Mock()
    hub.broadcast_tasks = AsyncMock(return_value=0)
    hub.broadcast_sync_status = AsyncMock(return_value=0)
    return hub


@pytest.fixture
def sample_task_data():
    """Sample task fields as the repositories receive them."""
    return {
        "title": "SPK-2024-010",
        "client_name": "Kriya Nusantara",
        "project_name": "Plakat Logam",
        "description": "Desain plakat untuk internal",
        "status": "In Progress",
        "priority": "High",
        "category": "Interior",
        "stage": "Layout",
        "assignee": "Ahmad",
        "deadline": "2024-03-01",
    }


@pytest.fixture
def sample_crew_member():
    """Sample crew member fields."""
    return {
        "name": "Ahmad",
        "role": "Designer Produk",
        "photo": "https://picsum.photos/seed/ahmad/200",
        "phone": "08123456789",
        "address": "Bandung",
        "join_date": "2018-01-15",
        "performance": 95,
    }


@pytest.fixture
def spk_email_body():
    return (
        "Kode: SPK-2024-088\n"
        "Klien: Kriya Nusantara\n"
        "Proyek: Souvenir Eksklusif G20\n"
        "Penanggung Jawab: Ahmad\n"
        "Deskripsi: Pembuatan souvenir eksklusif\n"
        "untuk delegasi G20."
    )
