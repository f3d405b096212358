import logging
from typing import Optional

import jwt
from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import JWT_ALGORITHM, JWT_SECRET
from app.database import get_db
from app.errors import UNAUTHORIZED
from app.models import SessionDB

logger = logging.getLogger("bookings")


def create_session(db: Session, user_id: int) -> str:
    """Issue a signed token for the user and record its session."""
    token = jwt.encode({"userId": user_id}, JWT_SECRET, algorithm=JWT_ALGORITHM)
    db.add(SessionDB(user_id=user_id, token=token))
    db.flush()
    return token


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> int:
    if not authorization:
        raise UNAUTHORIZED.to_http_exception()

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        raise UNAUTHORIZED.to_http_exception()

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected token error={type(e).__name__}")
        raise UNAUTHORIZED.to_http_exception()

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        raise UNAUTHORIZED.to_http_exception()

    session = db.execute(select(SessionDB).where(SessionDB.token == token)).scalars().first()
    if session is None or session.user_id != user_id:
        raise UNAUTHORIZED.to_http_exception()

    return user_id
