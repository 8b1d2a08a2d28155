"""MaterialRepository Port - 材料主数据查询

形状计算需要材料的密度和单价；未随请求提供材料时，用例通过此接口获取。
"""

from typing import Protocol

from src.domain.entities.shape import Material


class MaterialRepository(Protocol):
    """Material 仓储接口

    命名约定：
    - get_by_id(): 获取（必须存在，否则抛异常）
    - find_by_id(): 查找（可以返回 None）
    """

    def get_by_id(self, material_id: str) -> Material:
        """根据 ID 获取 Material

        抛出：
            NotFoundError: 当 Material 不存在时
        """
        ...

    def find_by_id(self, material_id: str) -> Material | None:
        ...
