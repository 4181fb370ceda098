"""
Sample data for demos and fresh installs.

Each table is seeded only while it is empty, so running the seed twice is
harmless. Run standalone with `python -m rnd_jobs.database.seed`.
"""

import asyncio
import logging
from typing import Dict, Optional

from .connection import Database, get_database
from .repositories.tasks import TaskRepository
from .repositories.crew import CrewRepository
from .repositories.clients import ClientRepository

logger = logging.getLogger(__name__)

SAMPLE_CREW = [
    # Senior
    {"name": "Ahmad", "role": "Designer Produk", "photo": "https://picsum.photos/seed/ahmad/200",
     "phone": "08123456789", "address": "Bandung", "join_date": "2018-01-15", "performance": 95},
    # Junior
    {"name": "Budi", "role": "Drafter", "photo": "https://picsum.photos/seed/budi/200",
     "phone": "08223456789", "address": "Cimahi", "join_date": "2022-05-20", "performance": 88},
    # Pemula
    {"name": "Siti", "role": "Motif Artist", "photo": "https://picsum.photos/seed/siti/200",
     "phone": "08323456789", "address": "Bandung", "join_date": "2025-11-10", "performance": 92},
    {"name": "Agung", "role": "Designer Produk", "photo": "https://picsum.photos/seed/agung/200",
     "phone": "08423456789", "address": "Sumedang", "join_date": "2015-03-12", "performance": 98},
    {"name": "Dewi", "role": "Drafter", "photo": "https://picsum.photos/seed/dewi/200",
     "phone": "08523456789", "address": "Lembang", "join_date": "2023-08-01", "performance": 85},
]

SAMPLE_CLIENTS = ["Kriya Nusantara", "G20 Indonesia", "Bank Mandiri", "PT Freeport"]

# (title, client, project, description, status, priority, category, stage, assignee, deadline)
SAMPLE_TASKS = [
    ("SPK-2024-001", "Kriya Nusantara", "Plakat Logam", "Desain plakat untuk internal",
     "To Do", "Medium", "Produk", "Inbox", "Ahmad", "2024-03-01"),
    ("SPD-2024-002", "Bank Mandiri", "Souvenir Corporate", "Pembuatan motif batik mandiri",
     "To Do", "High", "Motif", "Inbox", "Siti", "2024-03-05"),
    ("SPK-2024-003", "G20 Indonesia", "Trofi Utama", "Proses modeling 3D trofi",
     "In Progress", "Urgent", "Produk", "Model", "Agung", "2024-02-28"),
    ("SPK-2024-004", "PT Freeport", "Miniatur Tambang", "Pengerjaan detail teknis",
     "In Progress", "High", "Produk", "Render", "Budi", "2024-03-10"),
    ("SPK-2024-005", "Kriya Nusantara", "Wall Art", "Sketsa motif flora",
     "In Progress", "Medium", "Motif", "Motif", "Siti", "2024-03-15"),
    ("SPK-2023-099", "G20 Indonesia", "Cinderamata", "Selesai kirim",
     "Done", "Medium", "Produk", "Finish", "Ahmad", "2024-01-15"),
]

TASK_COLUMNS = (
    "title", "client_name", "project_name", "description", "status",
    "priority", "category", "stage", "assignee", "deadline",
)


async def seed_sample_data(db: Optional[Database] = None) -> Dict[str, int]:
    """Insert sample crew, clients and tasks into empty tables. Returns rows added per table."""
    db = db or get_database()
    task_repo = TaskRepository(db)
    crew_repo = CrewRepository(db)
    client_repo = ClientRepository(db)

    added = {"crew": 0, "clients": 0, "tasks": 0}

    if await crew_repo.count() == 0:
        for member in SAMPLE_CREW:
            await crew_repo.create(member)
            added["crew"] += 1

    if await client_repo.count() == 0:
        for name in SAMPLE_CLIENTS:
            await client_repo.create(name)
            added["clients"] += 1

    if await task_repo.count() == 0:
        for row in SAMPLE_TASKS:
            await task_repo.create(dict(zip(TASK_COLUMNS, row)))
            added["tasks"] += 1

    logger.info(
        f"Seeded {added['crew']} crew, {added['clients']} clients, {added['tasks']} tasks"
    )
    return added


async def _main() -> None:
    db = get_database()
    await db.initialize()
    try:
        added = await seed_sample_data(db)
        print(f"Seed complete: {added}")
    finally:
        await db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())
