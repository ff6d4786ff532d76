from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from hometail.core.config import settings

DATABASE_URL = settings.DATABASE_URL


def enable_sqlite_foreign_keys(engine):
    """SQLite ignores FK clauses (and ON DELETE CASCADE) unless asked per connection."""
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False
)
if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# DB dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
