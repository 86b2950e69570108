from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str):
    # SQLite needs check_same_thread, Postgres must NOT have it
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

    # an in-memory SQLite db lives on one connection, so every session must share it
    if database_url in _IN_MEMORY_URLS:
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)

    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
