# path: unitrack/core/models/__init__.py

__all__ = (
    "DatabaseHelper",
    "Base",
    "load_all_models",
)

from .db_helper import DatabaseHelper
from .base import Base


def load_all_models() -> None:
    """
    Импортирует модели всех модулей, чтобы Alembic / create_all видели их в Base.metadata.

    Не делаем это на уровне модуля: модели сами импортируют Base отсюда (цикл).
    """
    from unitrack.units.models import Unit  # noqa: F401
    from unitrack.inventory.models import InventoryItem  # noqa: F401
    from unitrack.cablestock.models import CableStockSnapshot  # noqa: F401
