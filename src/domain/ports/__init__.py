"""领域层 Ports - 定义领域层需要的外部依赖接口

设计原则：
- 使用 Protocol 定义接口（结构化子类型）
- 只定义领域层需要的方法
- 方法签名使用领域对象
"""

from src.domain.ports.material_repository import MaterialRepository
from src.domain.ports.permission_checker import PermissionChecker
from src.domain.ports.status_repository import StatusRepository

__all__ = ["MaterialRepository", "PermissionChecker", "StatusRepository"]
