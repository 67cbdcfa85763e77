from sqlmodel import create_engine, SQLModel
from .settings import settings


def build_engine(database_url: str, echo: bool = False):
    return create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False} if "sqlite" in database_url else {},
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def create_db_and_tables(target_engine=None):
    SQLModel.metadata.create_all(target_engine or engine)
