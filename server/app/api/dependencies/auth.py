from datetime import datetime, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core.logging import get_logger
from app.core.security import decode_access_token

logger = get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


async def get_current_owner(token: str = Depends(oauth2_scheme)) -> str:
    """Resolve the authenticated user id that owns client records."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        logger.info("auth.token_rejected", error=str(exc))
        raise credentials_exception from exc

    subject: str | None = payload.get("sub")
    exp = payload.get("exp")
    if not subject or exp is None:
        raise credentials_exception
    if datetime.fromtimestamp(exp, tz=timezone.utc) < datetime.now(timezone.utc):
        raise credentials_exception
    return subject
