import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from scheduling.database import Base  # noqa: E402
from scheduling.models.appointment import Appointment  # noqa: E402
from scheduling.models.file import File  # noqa: E402
from scheduling.models.notification import Notification  # noqa: E402,F401
from scheduling.models.user import User  # noqa: E402


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def people(db):
    avatar = File(name='avatar.png', path='abc123.png')
    db.add(avatar)
    db.flush()

    customer = User(id=1, name='Ana Customer', email='ana@example.com', provider=False)
    provider = User(id=2, name='Bruno Barber', email='bruno@example.com', provider=True, avatar_id=avatar.id)
    other_customer = User(id=3, name='Carla Customer', email='carla@example.com', provider=False)
    plain_user = User(id=4, name='Davi Plain', email='davi@example.com', provider=False)
    db.add_all([customer, provider, other_customer, plain_user])
    db.commit()

    return {
        'customer': customer,
        'provider': provider,
        'other_customer': other_customer,
        'plain_user': plain_user,
        'avatar': avatar,
    }


@pytest.fixture
def book(db):
    def _book(user_id: int, provider_id: int, date, canceled_at=None) -> Appointment:
        appointment = Appointment(user_id=user_id, provider_id=provider_id, date=date, canceled_at=canceled_at)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _book
