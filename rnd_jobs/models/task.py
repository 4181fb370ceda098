"""Task vocabulary: statuses, priorities, categories and their stage pipelines."""

from enum import Enum
from typing import Dict, List


class TaskStatus(str, Enum):
    """Task status states."""
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    DONE = "Done"


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class TaskCategory(str, Enum):
    """Work types, each with its own stage pipeline."""
    PRODUK = "Produk"
    INTERIOR = "Interior"
    MOTIF = "Motif"
    DRAFTER = "Drafter"


DEFAULT_STAGE = "Inbox"

# Ordered pipelines; advisory only, the store accepts any stage text
CATEGORY_STAGES: Dict[TaskCategory, List[str]] = {
    TaskCategory.PRODUK: [
        "Inbox", "Layout", "Space", "Model", "Render", "Approval",
        "Pola", "Estimasi", "Gamker", "Gamkem", "Pengawalan", "Finish",
    ],
    TaskCategory.INTERIOR: [
        "Inbox", "Layout", "Space", "Model", "Render", "Approval",
        "Pola", "Estimasi", "Gamker", "Pengawalan", "Finish",
    ],
    TaskCategory.MOTIF: [
        "Inbox", "Layout", "Approval", "Motif", "Film", "Warna",
        "Matras", "Pengawalan", "Finish",
    ],
    TaskCategory.DRAFTER: [
        "Inbox", "Film", "Matras", "Grafis", "Pola", "Estimasi",
        "Gamker", "Gamkem", "Pengawalan", "Finish",
    ],
}


def pipelines() -> Dict[str, List[str]]:
    """All pipelines keyed by category label, for clients."""
    return {category.value: list(stages) for category, stages in CATEGORY_STAGES.items()}
