# src/tests/conftest.py
import os

# 必须在导入应用之前设置，避免连接 MySQL
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

import uuid
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.main import app
from src.services.mysql_service import Base, get_db
from src.models.user import User, Follow
from src.models.trip import Trip, Participant, ThreadEntry, ThreadEntryTag, Media, FinalPost
from src.utils.security import create_access_token


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime(2025, 3, 1, 8, 0, 0)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(username: str, is_private: bool = False, **kwargs) -> User:
        user = User(
            id=str(uuid.uuid4()),
            email=f"{username}@example.com",
            username=username,
            password_hash=kwargs.pop("password_hash", f"hashed-{username}"),
            name=kwargs.pop("name", username.title()),
            is_private=is_private,
            created_at=kwargs.pop("created_at", BASE_TIME),
            updated_at=kwargs.pop("updated_at", BASE_TIME),
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_trip(db_session):
    def _make_trip(owner: User, **kwargs) -> Trip:
        trip = Trip(
            id=str(uuid.uuid4()),
            user_id=owner.id,
            created_at=kwargs.pop("created_at", BASE_TIME),
            updated_at=kwargs.pop("updated_at", BASE_TIME),
            **kwargs,
        )
        db_session.add(trip)
        db_session.commit()
        return trip

    return _make_trip


@pytest.fixture
def add_participant(db_session):
    def _add_participant(trip: Trip, user: User, joined_at: datetime = BASE_TIME) -> Participant:
        participant = Participant(id=str(uuid.uuid4()), trip_id=trip.id, user_id=user.id, joined_at=joined_at)
        db_session.add(participant)
        db_session.commit()
        return participant

    return _add_participant


@pytest.fixture
def add_entry(db_session):
    def _add_entry(trip: Trip, author: User, created_at: datetime, content: str = "", tagged=(), media_url=None) -> ThreadEntry:
        entry = ThreadEntry(
            id=str(uuid.uuid4()),
            trip_id=trip.id,
            author_id=author.id,
            content=content,
            created_at=created_at,
        )
        db_session.add(entry)
        db_session.flush()

        for tagged_user in tagged:
            db_session.add(ThreadEntryTag(
                id=str(uuid.uuid4()),
                thread_entry_id=entry.id,
                tagged_user_id=tagged_user.id,
            ))

        if media_url:
            db_session.add(Media(
                id=str(uuid.uuid4()),
                trip_id=trip.id,
                thread_entry_id=entry.id,
                url=media_url,
                created_at=created_at,
            ))

        db_session.commit()
        return entry

    return _add_entry


@pytest.fixture
def add_final_post(db_session):
    def _add_final_post(trip: Trip, content: str, created_at: datetime = BASE_TIME) -> FinalPost:
        post = FinalPost(id=str(uuid.uuid4()), trip_id=trip.id, content=content, created_at=created_at)
        db_session.add(post)
        db_session.commit()
        return post

    return _add_final_post


@pytest.fixture
def follow(db_session):
    def _follow(follower: User, followee: User) -> Follow:
        edge = Follow(id=str(uuid.uuid4()), follower_id=follower.id, followee_id=followee.id)
        db_session.add(edge)
        db_session.commit()
        return edge

    return _follow


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id: str) -> dict:
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
