"""
StayPricing 主应用入口
短租库存管理的夜间价格自动计算服务
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from staypricing.config import settings
from staypricing.database import init_db
from staypricing.routers import pricing

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时执行
    # 初始化数据库
    init_db()
    logger.info(f"{settings.APP_NAME} started")

    yield


# 创建应用
app = FastAPI(
    title="StayPricing - 短租夜间定价服务",
    description="基于运营规则的房间夜间价格自动计算",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生产环境应限制具体域名
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(pricing.router)


@app.get("/")
def root():
    """根路径"""
    return {"name": settings.APP_NAME, "version": "1.0.0"}


@app.get("/health")
def health():
    """健康检查"""
    return {"status": "healthy"}
