from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from shelytics.config import settings

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if "sqlite" in settings.database_url else {},
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def import_models():
    import shelytics.models.risk_zone  # noqa: F401
    import shelytics.models.user  # noqa: F401
    import shelytics.models.incident  # noqa: F401


def init_db():
    import_models()
    Base.metadata.create_all(bind=engine)
