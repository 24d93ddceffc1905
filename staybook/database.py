"""
数据库配置 - SQLAlchemy 持久化层
库存与预订数据都经由这里的会话访问
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from staybook.config import settings
from staybook.errors import StoreUnavailable

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_store_engine(url: str, timeout: float = settings.STORE_TIMEOUT_SECONDS, **kwargs):
    """创建数据库引擎，存储调用带超时"""
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": timeout}
        return create_engine(url, connect_args=connect_args, **kwargs)
    return create_engine(url, pool_timeout=timeout, pool_pre_ping=True, **kwargs)


engine = create_store_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """依赖注入：获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """初始化数据库表"""
    from staybook.models import ontology  # noqa
    target = bind or engine
    Base.metadata.create_all(bind=target)

    # 启用 WAL 模式以提高并发性能
    if target.dialect.name == "sqlite" and target.url.database not in (None, "", ":memory:"):
        with target.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.execute(text("PRAGMA synchronous=NORMAL"))
            conn.commit()


@contextmanager
def store_call(db: Session, operation: str):
    """
    包装一次存储访问

    存储层异常（连接失败、锁等待超时等）回滚后转换为 StoreUnavailable；
    IntegrityError 原样抛出，由调用方决定其业务含义。
    """
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Store failure during {operation}: {e}")
        raise StoreUnavailable(f"Store unavailable during {operation}") from e
