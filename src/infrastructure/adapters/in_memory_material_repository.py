"""In-memory MaterialRepository adapter (Infrastructure)."""

from __future__ import annotations

from collections.abc import Iterable

from src.domain.entities.shape import Material
from src.domain.exceptions import NotFoundError
from src.domain.ports.material_repository import MaterialRepository


class InMemoryMaterialRepository(MaterialRepository):
    def __init__(self, materials: Iterable[Material] = ()) -> None:
        self._data: dict[str, Material] = {material.id: material for material in materials}

    def add(self, material: Material) -> None:
        self._data[material.id] = material

    def find_by_id(self, material_id: str) -> Material | None:
        return self._data.get(material_id)

    def get_by_id(self, material_id: str) -> Material:
        material = self.find_by_id(material_id)
        if material is None:
            raise NotFoundError("Material", material_id)
        return material
