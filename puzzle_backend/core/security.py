# puzzle_backend/core/security.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from puzzle_backend.core.errors import HashError


ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
BCRYPT_ROUNDS = 10


# -------------------------------
# Password hashing
# -------------------------------

class PasswordHasher:
    """
    bcrypt with a fixed cost factor. Every hash carries its own salt,
    so hashing the same password twice gives two different strings.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        try:
            return self.context.hash(password)
        except (TypeError, ValueError, RuntimeError) as e:
            raise HashError(f"Could not hash password: {e}") from e

    def verify(self, password: Optional[str], hashed_password: str) -> bool:
        if password is None or not hashed_password:
            return False
        try:
            return self.context.verify(password, hashed_password)
        except (TypeError, ValueError):
            return False


# -------------------------------
# Bearer tokens
# -------------------------------

@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies HS256 JWTs carrying {userId, username, iat, exp}.
    """

    def __init__(
        self,
        secret: str,
        expires_delta: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        now: Callable[[], datetime] = _utcnow,
    ):
        self.secret = secret or ""
        self.expires_delta = expires_delta
        self.now = now

    def issue(self, user_id: int, username: str) -> str:
        issued_at = self.now()
        expire = issued_at + self.expires_delta
        to_encode = {
            "userId": user_id,
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Returns the decoded claims, or None for a malformed, badly signed
        or expired token.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError:
            return None

        user_id = payload.get("userId")
        username = payload.get("username")
        exp = payload.get("exp")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            return None
        if not isinstance(username, str) or exp is None:
            return None

        try:
            iat = payload.get("iat", exp - int(self.expires_delta.total_seconds()))
            issued_at = datetime.fromtimestamp(iat, tz=timezone.utc)
            expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

        return TokenClaims(
            user_id=user_id,
            username=username,
            issued_at=issued_at,
            expires_at=expires_at,
        )
