from collections import defaultdict
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Bundle, Session
from src.models.user import User, Follow
from src.models.trip import Trip, Participant, ThreadEntry, ThreadEntryTag, Media, FinalPost
from src.schemas.user import UserProjection
from src.schemas.trip import (
    TripDetail, TripCounts, ParticipantResponse, ThreadEntryResponse,
    MediaResponse, FinalPostResponse
)


def _user_bundle(name: str) -> Bundle:
    """用户公开字段（只查询白名单列，不读取 password_hash）"""
    return Bundle(
        name,
        User.id,
        User.email,
        User.username,
        User.name,
        User.avatar_url,
        User.bio,
        User.is_private,
        User.created_at,
        User.updated_at,
    )


class TripService:
    """行程详情查询服务（只读）"""

    @staticmethod
    def get_trip_detail(db: Session, trip_id: str) -> Optional[TripDetail]:
        """
        查询行程聚合：创建者、参与者、按时间正序的动态（作者/被标记用户/媒体）、
        总结帖以及各类计数。行程不存在时返回 None。
        """
        row = db.query(Trip, _user_bundle("owner")).outerjoin(
            User, User.id == Trip.user_id
        ).filter(Trip.id == trip_id).first()

        if not row:
            return None

        trip = row[0]
        owner = UserProjection.model_validate(row.owner) if row.owner.id is not None else None

        participants = TripService._get_participants(db, trip.id)
        thread_entries = TripService._get_thread_entries(db, trip.id)

        final_post = db.query(FinalPost).filter(FinalPost.trip_id == trip.id).first()

        return TripDetail(
            id=trip.id,
            user_id=trip.user_id,
            start_date=trip.start_date,
            end_date=trip.end_date,
            created_at=trip.created_at,
            updated_at=trip.updated_at,
            user=owner,
            participants=participants,
            thread_entries=thread_entries,
            final_post=FinalPostResponse.model_validate(final_post) if final_post else None,
            counts=TripService._get_counts(db, trip.id),
        )

    @staticmethod
    def _get_participants(db: Session, trip_id: str) -> List[ParticipantResponse]:
        rows = db.query(Participant, _user_bundle("user")).join(
            User, User.id == Participant.user_id
        ).filter(
            Participant.trip_id == trip_id
        ).order_by(Participant.joined_at.asc()).all()

        return [
            ParticipantResponse(
                id=participant.id,
                trip_id=participant.trip_id,
                user_id=participant.user_id,
                joined_at=participant.joined_at,
                user=UserProjection.model_validate(user),
            )
            for participant, user in rows
        ]

    @staticmethod
    def _get_thread_entries(db: Session, trip_id: str) -> List[ThreadEntryResponse]:
        rows = db.query(ThreadEntry, _user_bundle("author")).join(
            User, User.id == ThreadEntry.author_id
        ).filter(
            ThreadEntry.trip_id == trip_id
        ).order_by(ThreadEntry.created_at.asc(), ThreadEntry.id.asc()).all()

        entry_ids = [entry.id for entry, _ in rows]
        tagged_users = TripService._get_tagged_users(db, entry_ids)
        media_by_entry = TripService._get_media(db, entry_ids)

        result = []
        for entry, author in rows:
            media = media_by_entry.get(entry.id)
            result.append(ThreadEntryResponse(
                id=entry.id,
                trip_id=entry.trip_id,
                author_id=entry.author_id,
                content=entry.content,
                created_at=entry.created_at,
                author=UserProjection.model_validate(author),
                tagged_users=tagged_users.get(entry.id, []),
                media=MediaResponse.model_validate(media) if media else None,
            ))
        return result

    @staticmethod
    def _get_tagged_users(db: Session, entry_ids: List[str]) -> Dict[str, List[UserProjection]]:
        """thread_entry_id -> 被标记用户列表（去掉中间的 tag 记录）"""
        if not entry_ids:
            return {}

        rows = db.query(ThreadEntryTag.thread_entry_id, _user_bundle("tagged_user")).join(
            User, User.id == ThreadEntryTag.tagged_user_id
        ).filter(
            ThreadEntryTag.thread_entry_id.in_(entry_ids)
        ).order_by(ThreadEntryTag.id.asc()).all()

        tagged = defaultdict(list)
        for thread_entry_id, user in rows:
            tagged[thread_entry_id].append(UserProjection.model_validate(user))
        return tagged

    @staticmethod
    def _get_media(db: Session, entry_ids: List[str]) -> Dict[str, Media]:
        if not entry_ids:
            return {}

        media_rows = db.query(Media).filter(Media.thread_entry_id.in_(entry_ids)).all()
        return {media.thread_entry_id: media for media in media_rows}

    @staticmethod
    def _get_counts(db: Session, trip_id: str) -> TripCounts:
        thread_entries = db.query(func.count(ThreadEntry.id)).filter(
            ThreadEntry.trip_id == trip_id
        ).scalar() or 0
        media = db.query(func.count(Media.id)).filter(
            Media.trip_id == trip_id
        ).scalar() or 0
        participants = db.query(func.count(Participant.id)).filter(
            Participant.trip_id == trip_id
        ).scalar() or 0

        return TripCounts(
            thread_entries=thread_entries,
            media=media,
            participants=participants,
        )

    @staticmethod
    def is_following(db: Session, follower_id: str, followee_id: str) -> bool:
        """follower 是否关注了 followee"""
        follow = db.query(Follow.id).filter(
            Follow.follower_id == follower_id,
            Follow.followee_id == followee_id
        ).first()
        return follow is not None
