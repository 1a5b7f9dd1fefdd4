# session.py
# Configures the database engine and per-request session management using SQLAlchemy.

import os

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base, Session

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str) -> Engine:
    """
    Build the engine (and its connection pool) for the given URL.
    SQLite connections get foreign key enforcement switched on.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get a database session.
# The session factory lives on app.state and is installed by mealprep.main.create_app.
def get_db(request: Request):
    """
    SQLAlchemy session generator.
    Yields a session and ensures it's closed afterward.
    """
    db: Session = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()
