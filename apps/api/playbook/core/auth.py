import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt

from playbook.core.config import get_settings


_MAX_BCRYPT_BYTES = 72  # bcrypt limit

USERNAME_CLAIM = "username"
DISPLAY_NAME_CLAIM = "display_name"


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BCRYPT_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    subject: str,
    username: Optional[str] = None,
    display_name: Optional[str] = None,
) -> str:
    """Signed bearer token for a user id; username and display name ride along as claims."""
    s = get_settings()
    now = datetime.now(timezone.utc)
    claims = {"sub": subject, "iat": now, "exp": now + timedelta(minutes=s.jwt_expire_minutes)}
    if username is not None:
        claims[USERNAME_CLAIM] = username
    if display_name is not None:
        claims[DISPLAY_NAME_CLAIM] = display_name
    return jwt.encode(claims, s.jwt_secret, algorithm=s.jwt_algorithm)


def decode_access_token(token: str) -> Optional[str]:
    """User id from a valid token, None when the token is malformed, forged or expired."""
    s = get_settings()
    try:
        payload = jwt.decode(token, s.jwt_secret, algorithms=[s.jwt_algorithm])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub is not None else None


def token_from_request(authorization: Optional[str], query_token: Optional[str]) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the ?token= query param."""
    if authorization and authorization.startswith("Bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return query_token or None
