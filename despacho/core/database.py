from contextlib import contextmanager
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from despacho.core.config import settings

load_dotenv()

Base = declarative_base()

# Singleton para el engine y session factory
_engine = None
_session_factory = None


def get_database_url() -> str:
    return settings.database_url


def get_engine():
    """Obtiene el engine de base de datos (singleton)."""
    global _engine

    if _engine is None:
        database_url = get_database_url()

        connect_args = {}
        if database_url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}
            db_file = database_url.replace("sqlite:///", "", 1)
            if db_file and db_file != ":memory:":
                Path(db_file).parent.mkdir(parents=True, exist_ok=True)

        _engine = create_engine(
            database_url,
            echo=False,
            connect_args=connect_args,
            pool_pre_ping=True,
        )

        if database_url.startswith("sqlite"):
            enable_sqlite_foreign_keys(_engine)

    return _engine


def enable_sqlite_foreign_keys(engine) -> None:
    """SQLite no aplica ON DELETE RESTRICT/CASCADE sin este PRAGMA."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


def get_session_factory():
    """Obtiene el session factory (singleton)."""
    global _session_factory

    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    return _session_factory


@contextmanager
def get_session():
    """
    Context manager para obtener una sesión de base de datos.
    Garantiza commit/rollback y cierre correcto.
    """
    SessionLocal = get_session_factory()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db():
    """
    Dependency para FastAPI: una sesión por request.

    NO hace commit automático.
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Crea las tablas que falten."""
    import despacho.models  # noqa: F401  registra los modelos en Base

    Base.metadata.create_all(bind=get_engine())
