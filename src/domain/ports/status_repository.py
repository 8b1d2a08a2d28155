"""StatusRepository Port - 单据状态的读取与持久化

状态机本身从不读写存储：
- 由持久化层提供“当前状态”
- 流转被接受后，由持久化层写入“目标状态”
"""

from typing import Protocol


class StatusRepository(Protocol):
    """单据状态仓储接口"""

    def get_status(self, entity_id: str) -> str:
        """读取当前状态

        抛出：
            NotFoundError: 单据不存在
        """
        ...

    def save_status(self, entity_id: str, status: str) -> None:
        """写入新状态"""
        ...
