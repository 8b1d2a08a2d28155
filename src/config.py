"""应用配置模块 - 使用 Pydantic Settings 管理环境变量"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="ERP Workflow Costing", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    env: Literal["development", "production", "test"] = Field(
        default="development", description="运行环境"
    )

    # Logging
    log_level: str = Field(default="INFO", description="日志级别")
    log_format: Literal["json", "text"] = Field(default="text", description="日志格式")

    # Costing
    default_currency: str = Field(default="INR", description="默认币种（未指定币种时使用）")
    max_formula_length: int = Field(
        default=500, gt=0, description="自定义公式允许的最大长度（字符数）"
    )


# 全局配置实例
settings = Settings()
