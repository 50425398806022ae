import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Header
from pydantic import BaseModel

from whiteboard.config.config import settings
from whiteboard.exceptions import Unauthorized

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """외부 identity provider가 발급한 토큰에서 꺼낸 호출자 정보"""

    subject: str
    name: str = ""


def create_access_token(subject: str, name: str | None = None) -> str:
    """
    JWT 액세스 토큰을 생성합니다.
    운영에서는 외부 identity provider가 발급하며, 테스트와 로컬 개발에서 사용합니다.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt.expire_minutes),
    }
    if name is not None:
        payload["name"] = name
    if settings.jwt.issuer is not None:
        payload["iss"] = settings.jwt.issuer
    return jwt.encode(
        payload, settings.jwt.secret_key, algorithm=settings.jwt.algorithm
    )


def _decode(token: str) -> dict:
    # issuer가 None이면 PyJWT는 iss 검증을 건너뜁니다.
    return jwt.decode(
        token,
        settings.jwt.secret_key,
        algorithms=[settings.jwt.algorithm],
        issuer=settings.jwt.issuer,
        options={"require": ["sub", "exp"]},
    )


async def get_identity(
    authorization: str | None = Header(default=None),
) -> Identity:
    """
    `identity: Identity = Depends(get_identity)`로 사용
    Authorization 헤더가 없거나 검증에 실패하면 어떤 작업도 하기 전에 401을 던집니다.
    """
    if authorization is None:
        raise Unauthorized()

    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError as e:
        raise Unauthorized("Invalid authorization header format") from e
    if scheme.lower() != "bearer":
        raise Unauthorized("Invalid authentication scheme")

    try:
        payload = _decode(token)
    except jwt.ExpiredSignatureError as e:
        raise Unauthorized("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.debug("토큰 검증 실패: %s", e)
        raise Unauthorized("Invalid token") from e

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise Unauthorized("Invalid token payload")

    name = payload.get("name")
    return Identity(subject=subject, name=name if isinstance(name, str) else "")
