from typing import ClassVar, Generic, List, Optional, TypeVar
from pydantic import Field
from src.schemas.user import UserProjection
from src.utils.serialization import IsoDatetime, ProjectionModel

T = TypeVar("T")


class ApiResponse(ProjectionModel, Generic[T]):
    """统一响应包装 {success, data?, error?}"""
    omit_when_absent: ClassVar[frozenset] = frozenset({"data", "error"})

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class MediaResponse(ProjectionModel):
    id: str
    trip_id: str
    thread_entry_id: Optional[str] = None
    url: str
    media_type: Optional[str] = None
    created_at: IsoDatetime


class FinalPostResponse(ProjectionModel):
    id: str
    trip_id: str
    content: Optional[str] = None
    created_at: IsoDatetime


class ParticipantResponse(ProjectionModel):
    id: str
    trip_id: str
    user_id: str
    joined_at: IsoDatetime
    user: UserProjection


class ThreadEntryResponse(ProjectionModel):
    omit_when_absent: ClassVar[frozenset] = frozenset({"media"})

    id: str
    trip_id: str
    author_id: str
    content: Optional[str] = None
    created_at: IsoDatetime
    author: UserProjection
    # 直接展开为被标记的用户列表
    tagged_users: List[UserProjection] = Field(default_factory=list)
    media: Optional[MediaResponse] = None


class TripCounts(ProjectionModel):
    thread_entries: int = 0
    media: int = 0
    participants: int = 0


class TripDetail(ProjectionModel):
    """行程详情（聚合）"""
    omit_when_absent: ClassVar[frozenset] = frozenset({"start_date", "end_date", "user", "final_post"})

    id: str
    user_id: str
    start_date: Optional[IsoDatetime] = None
    end_date: Optional[IsoDatetime] = None
    created_at: IsoDatetime
    updated_at: IsoDatetime
    user: Optional[UserProjection] = None
    participants: List[ParticipantResponse] = Field(default_factory=list)
    thread_entries: List[ThreadEntryResponse] = Field(default_factory=list)
    final_post: Optional[FinalPostResponse] = None
    counts: TripCounts = Field(default_factory=TripCounts, alias="_count")
