"""Infrastructure Adapters Package

提供 Domain Port 的 Infrastructure 层适配器实现。
遵循 Ports and Adapters 架构模式。
"""

from src.infrastructure.adapters.bitmask_permission_checker import BitmaskPermissionChecker
from src.infrastructure.adapters.in_memory_material_repository import (
    InMemoryMaterialRepository,
)
from src.infrastructure.adapters.in_memory_status_repository import InMemoryStatusRepository

__all__ = [
    "BitmaskPermissionChecker",
    "InMemoryMaterialRepository",
    "InMemoryStatusRepository",
]
