from typing import Optional
from src.utils.serialization import IsoDatetime, ProjectionModel


# ==================== 用户信息 ====================

class UserProjection(ProjectionModel):
    """对外公开的用户字段（不包含密码等凭证字段）"""
    id: str
    email: str
    username: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_private: bool = False
    created_at: IsoDatetime
    updated_at: IsoDatetime
