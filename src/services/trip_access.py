from enum import Enum
from typing import Callable, Iterable, Optional


class AccessDecision(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"


def decide_trip_access(
    viewer_id: str,
    owner_id: Optional[str],
    participant_user_ids: Iterable[str],
    owner_is_private: bool,
    follows_owner: Callable[[], bool],
) -> AccessDecision:
    """
    判断当前用户能否查看行程详情

    规则（按顺序短路）：
    1. 行程创建者 -> 允许
    2. 行程参与者 -> 允许
    3. 创建者账号公开 -> 允许
    4. 创建者账号私密 -> 仅关注者允许

    follows_owner 只在第 4 步才会调用，避免多余的数据库查询。
    """
    if owner_id is not None and viewer_id == owner_id:
        return AccessDecision.GRANTED

    if viewer_id in set(participant_user_ids):
        return AccessDecision.GRANTED

    if not owner_is_private:
        return AccessDecision.GRANTED

    return AccessDecision.GRANTED if follows_owner() else AccessDecision.DENIED
