"""
应用配置
从环境变量读取配置
"""
from decimal import Decimal
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "StayPricing"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./staypricing.db"

    # 定价引擎配置
    # 物业未配置基础价格时使用
    DEFAULT_BASE_PRICE: Decimal = Decimal("100")

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# 全局设置实例
settings = Settings()
