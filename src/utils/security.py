from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from src.services.config import settings


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """创建访问令牌"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """解码令牌（签名错误、过期、格式错误都返回 None）"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


class AuthService:
    """令牌校验服务"""

    @staticmethod
    def verify_access_token(token: str) -> Optional[dict]:
        """
        校验访问令牌

        Returns:
            {"user_id": ...}，令牌无效时返回 None（不区分具体原因）
        """
        payload = decode_token(token)
        if not payload:
            return None

        if payload.get("type") != "access":
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        return {"user_id": str(user_id)}
