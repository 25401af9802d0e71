"""
PostgreSQL Database Configuration
Connection pooling, session factory and health helpers.
"""

from sqlalchemy import create_engine, event, pool, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, registry
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

DATABASE_URL = settings.POSTGRES_URI


def build_engine(database_url: str):
    """
    Create the engine for ``database_url``.

    PostgreSQL gets a bounded QueuePool sized from settings. SQLite (used by
    the test-suite) shares one in-memory connection through a StaticPool.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        return create_engine(
            database_url,
            poolclass=pool.StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.DB_ECHO,
        )

    min_connections = settings.DB_POOL_MIN_CONNECTIONS
    return create_engine(
        database_url,
        poolclass=pool.QueuePool,
        pool_size=min_connections,  # Connections kept open in the pool
        max_overflow=settings.DB_POOL_MAX_CONNECTIONS - min_connections,
        pool_timeout=settings.DB_POOL_ACQUIRE_TIMEOUT,  # Seconds to wait for a connection
        pool_recycle=settings.DB_POOL_IDLE_TIMEOUT,  # Evict connections older than this
        pool_pre_ping=True,  # Test connections before using them
        echo=settings.DB_ECHO,
        connect_args={
            "connect_timeout": settings.DB_POOL_ACQUIRE_TIMEOUT,
        },
        execution_options={
            "isolation_level": "READ COMMITTED",
        },
    )


engine = build_engine(DATABASE_URL)
logger.info(f"Application connecting to database backend: {engine.url.get_backend_name()}")

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,  # Manual flush for better control
    bind=engine,
    expire_on_commit=False,  # Don't expire objects after commit
)

mapper_registry = registry()
Base = mapper_registry.generate_base()


@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    """Switch on foreign key enforcement for SQLite connections."""
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_mappers():
    """Configure SQLAlchemy mappers dynamically to avoid circular imports."""
    from database import get_db_models

    get_db_models()
    mapper_registry.configure()
    logger.info("Mappers configured successfully.")


def get_db():
    """
    Dependency for getting database sessions with automatic cleanup
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Initialize database with tables"""
    configure_mappers()
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized with tables")


def get_connection_pool_status():
    """
    Get current connection pool status for monitoring

    Returns:
        dict: Pool statistics
    """
    pool_obj = engine.pool
    if not isinstance(pool_obj, pool.QueuePool):
        return {"pool": pool_obj.__class__.__name__}
    return {
        'size': pool_obj.size(),
        'checked_in': pool_obj.checkedin(),
        'checked_out': pool_obj.checkedout(),
        'overflow': pool_obj.overflow(),
        'total_connections': pool_obj.size() + pool_obj.overflow(),
    }


def close_all_connections():
    """Close all database connections (for shutdown)"""
    engine.dispose()
    logger.info("All database connections closed")


def check_database_health() -> dict:
    """
    Check database health and return status

    Returns:
        dict: Database health status
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {
            'status': 'healthy',
            'backend': engine.dialect.name,
            'pool': get_connection_pool_status(),
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            'status': 'unhealthy',
            'error': str(e)
        }
