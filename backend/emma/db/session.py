from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from emma.core.config import DEFAULT_DATABASE_URL, settings


def build_engine(database_url: str, echo: bool = False):
    return create_engine(database_url, echo=echo, pool_pre_ping=True, future=True)


def build_sessionmaker(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


engine = build_engine(settings.database_url or DEFAULT_DATABASE_URL, settings.echo_sql)
SessionLocal = build_sessionmaker(engine)
