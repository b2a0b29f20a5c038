"""数据库初始化模块"""
from contextlib import contextmanager
from typing import Iterator, Optional
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# 创建基类
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """根据连接串创建数据库引擎"""
    if database_url.startswith('sqlite'):
        kwargs = {'connect_args': {'check_same_thread': False}}
        # 内存数据库需要在所有会话间共享同一个连接
        if ':memory:' in database_url or database_url in ('sqlite://', 'sqlite+pysqlite://'):
            kwargs['poolclass'] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,  # 连接池预检查
        pool_size=10,        # 连接池大小
        max_overflow=20      # 最大溢出连接数
    )


class Database:
    """
    数据库生命周期对象

    持有引擎和会话工厂，由应用启动时创建一次并注入到存储层。
    """

    def __init__(self, database_url: str, engine: Optional[Engine] = None):
        self.url = database_url
        self.engine = engine or build_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """提供一个事务范围的会话，成功时提交，异常时回滚"""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def init_db(self):
        """初始化数据库，创建所有表"""
        # 导入模型，确保表已注册到元数据
        import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("数据库表创建/检查完成")
        except Exception as e:
            logger.error(f"创建数据库表时出错: {str(e)}")
            raise

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        self.engine.dispose()
