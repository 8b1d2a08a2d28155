"""日志配置

根据 Settings.log_level / Settings.log_format 配置根 logger：
- text: 人类可读的单行格式
- json: 每条记录一行 JSON，附带 extra 上下文（formula、service_id 等）
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from src.config import Settings, settings as default_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# LogRecord 自带的属性，不属于 extra 上下文
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """单行 JSON 日志格式"""

    def __init__(self, app_name: str | None = None):
        super().__init__()
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.app_name:
            payload["app"] = self.app_name
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(config: Settings | None = None) -> logging.Handler:
    """安装根日志处理器（重复调用会替换之前安装的处理器）

    返回：
        安装的 handler
    """
    config = config or default_settings
    root = logging.getLogger()

    for handler in list(root.handlers):
        if getattr(handler, "_erp_costing_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._erp_costing_handler = True  # type: ignore[attr-defined]
    if config.log_format == "json":
        handler.setFormatter(JsonLogFormatter(app_name=config.app_name))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(config.log_level.upper())
    return handler
