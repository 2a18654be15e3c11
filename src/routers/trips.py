import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from src.services.mysql_service import get_db
from src.services.trip_service import TripService
from src.services.trip_access import AccessDecision, decide_trip_access
from src.schemas.trip import ApiResponse, TripDetail
from src.middleware.auth import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trips", tags=["行程"])


@router.get("/{trip_id}", response_model=ApiResponse[TripDetail], summary="获取行程详情")
def get_trip(
    trip_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    获取行程详情（创建者、参与者、动态、总结帖）

    - 创建者和参与者可以查看
    - 创建者账号公开时，所有登录用户都可以查看
    - 创建者账号私密时，仅关注者可以查看
    """
    try:
        trip = TripService.get_trip_detail(db, trip_id)

        if not trip:
            raise HTTPException(status_code=404, detail="Trip not found")

        owner_is_private = bool(trip.user and trip.user.is_private)
        decision = decide_trip_access(
            viewer_id=current_user_id,
            owner_id=trip.user_id,
            participant_user_ids=[p.user_id for p in trip.participants],
            owner_is_private=owner_is_private,
            follows_owner=lambda: TripService.is_following(db, current_user_id, trip.user_id),
        )

        if decision is AccessDecision.DENIED:
            logger.info("Access denied: user=%s trip=%s", current_user_id, trip_id)
            raise HTTPException(status_code=403, detail="Access denied to this private trip")

        return ApiResponse[TripDetail](success=True, data=trip)

    except HTTPException:
        raise
    except Exception:
        logger.exception("Get trip error: trip=%s", trip_id)
        raise HTTPException(status_code=500, detail="Internal server error")
