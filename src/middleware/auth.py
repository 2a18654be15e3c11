from fastapi import Header, HTTPException
from typing import Optional
from src.utils.security import AuthService

BEARER_PREFIX = "Bearer "


class AuthMiddleware:
    """认证中间件"""

    @staticmethod
    def get_current_user_id(
        authorization: Optional[str] = Header(None)
    ) -> str:
        """从 Authorization: Bearer <token> 中解析当前用户ID（不查询数据库）"""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise HTTPException(
                status_code=401,
                detail="Authorization token required",
                headers={"WWW-Authenticate": "Bearer"},
            )

        token = authorization[len(BEARER_PREFIX):]

        payload = AuthService.verify_access_token(token)
        if not payload:
            raise HTTPException(
                status_code=401,
                detail="Invalid token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return payload["user_id"]


# 快捷依赖
get_current_user_id = AuthMiddleware.get_current_user_id
