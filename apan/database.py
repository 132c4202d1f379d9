from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from apan.config import DATABASE_URL, SQL_ECHO

# For SQLite we must add connect_args
connect_args = {}
engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
    # in-memory databases live inside a single connection
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=SQL_ECHO,
    **engine_kwargs,
)

if engine.dialect.name == "sqlite":

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


UNIQUE_VIOLATION_PGCODE = "23505"


def is_unique_violation(exc) -> bool:
    """True when an IntegrityError comes from a UNIQUE / primary key rule,
    not from a foreign key or NOT NULL check."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_PGCODE:
        return True
    # sqlite reports composite primary keys the same way
    return "UNIQUE constraint failed" in str(orig)
