"""
应用配置
从环境变量 / .env 读取配置
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "StayBook"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./staybook.db"
    # 存储调用超时（秒），超时后操作失败为 StoreUnavailable
    STORE_TIMEOUT_SECONDS: float = 5.0

    # JWT 配置（令牌由外部身份服务签发）
    SECRET_KEY: str = "staybook-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # 初始化数据中的管理员档案
    ADMIN_ID: str = "admin"
    ADMIN_EMAIL: str = "admin@hotel.com"
    ADMIN_NAME: str = "Hotel Administrator"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# 全局设置实例
settings = Settings()
