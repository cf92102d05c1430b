import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shelytics.database import Base, get_db, import_models
from shelytics.main import app
from shelytics.models.user import EmergencyContact, Profile, UserPreferences


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    import_models()
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def user(db):
    """A user with a profile, two contacts and auto-alert enabled."""
    user_id = "user-1"
    db.add(Profile(user_id=user_id, name="Asha"))
    db.add(EmergencyContact(id="contact-1", user_id=user_id, name="Mom", phone="+911111111111", is_primary=True))
    db.add(EmergencyContact(id="contact-2", user_id=user_id, name="Ravi", phone="+912222222222"))
    db.add(UserPreferences(user_id=user_id, auto_alert_on_risk_zone=True))
    db.commit()
    return user_id


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
