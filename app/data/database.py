# app/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.utils.settings import DATABASE_URL, LOCK_TIMEOUT_MS

Base = declarative_base()


def create_db_engine(url: str = DATABASE_URL, lock_timeout_ms: int = LOCK_TIMEOUT_MS) -> Engine:
    """
    lock_timeout_ms jest ustalany raz, dla calego engine.
    Postgres: domyslny lock_timeout sesji, unit_of_work moze go nadpisac
    per transakcja (SET LOCAL). SQLite: busy timeout polaczenia, innej
    kontroli nie ma.
    """
    if url.startswith("postgresql"):
        return create_engine(
            url,
            pool_pre_ping=True,
            future=True,
            connect_args={"options": f"-c lock_timeout={int(lock_timeout_ms)}"},
        )
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, future=True)

    #sqlite (dev/testy): busy timeout = timeout blokady
    engine = create_engine(
        url,
        future=True,
        connect_args={
            "check_same_thread": False,
            "timeout": lock_timeout_ms / 1000,
        },
    )

    # sqlite nie ma SELECT ... FOR UPDATE, wiec kazda transakcja bierze
    # blokade zapisu od razu (BEGIN IMMEDIATE) - pisarze ida po kolei
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = create_db_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    #import modeli zeby zarejestrowaly sie w Base.metadata
    import app.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
