from sqlalchemy import Column, String, Text, DateTime, TIMESTAMP, ForeignKey, UniqueConstraint, func
from src.services.mysql_service import Base
import uuid


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())


class Participant(Base):
    __tablename__ = "trip_participants"
    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_participants_trip_user"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    joined_at = Column(TIMESTAMP, server_default=func.now())


class ThreadEntry(Base):
    __tablename__ = "thread_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)


class ThreadEntryTag(Base):
    """动态中被标记（@）的用户"""
    __tablename__ = "thread_entry_tags"
    __table_args__ = (
        UniqueConstraint("thread_entry_id", "tagged_user_id", name="uq_thread_entry_tags_entry_user"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    thread_entry_id = Column(String(36), ForeignKey("thread_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    tagged_user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)


class Media(Base):
    __tablename__ = "media"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    thread_entry_id = Column(String(36), ForeignKey("thread_entries.id", ondelete="CASCADE"), nullable=True, unique=True)
    url = Column(String(500), nullable=False)
    media_type = Column(String(20), default="image")
    created_at = Column(TIMESTAMP, server_default=func.now())


class FinalPost(Base):
    __tablename__ = "final_posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, unique=True)
    content = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())
