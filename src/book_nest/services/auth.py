"""Bearer token issuing/verification and password hashing."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt

from book_nest.domain.errors import Unauthenticated, ValidationFailed
from book_nest.domain.models import Identity, UserRecord

TOKEN_HEADER = "x-auth-token"
TOKEN_COOKIE = "token"
_ALGORITHM = "HS256"
_BCRYPT_ROUNDS = 10
_BCRYPT_MAX_BYTES = 72


@dataclass
class TokenService:
    """Issues and verifies signed, time-boxed access tokens."""

    secret: str
    ttl_hours: int = 24

    def issue(self, user: UserRecord) -> str:
        """Sign a token encoding the user's id, username and email."""
        now = datetime.now(tz=UTC)
        payload = {
            "userId": str(user.id),
            "username": user.username,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(hours=self.ttl_hours),
        }
        return jwt.encode(payload, self.secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> Identity:
        """Decode a token into the caller identity."""
        try:
            decoded = jwt.decode(token, self.secret, algorithms=[_ALGORITHM])
        except jwt.InvalidTokenError as exc:
            raise Unauthenticated("Token is not valid") from exc
        raw_user_id = decoded.get("userId")
        if not raw_user_id:
            raise Unauthenticated("Invalid token format")
        try:
            user_id = UUID(str(raw_user_id))
        except ValueError as exc:
            raise Unauthenticated("Invalid token format") from exc
        return Identity(
            id=user_id,
            username=decoded.get("username"),
            email=decoded.get("email"),
        )

    def authenticate(
        self, header_token: str | None, cookie_token: str | None
    ) -> Identity:
        """Resolve the identity from the header token, falling back to the cookie."""
        token = header_token or cookie_token
        if not token:
            raise Unauthenticated("No token, authorization denied")
        return self.verify(token)


def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh salt."""
    encoded = _encode_password(password)
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Return True when the password matches the stored hash."""
    encoded = password.encode()
    if len(encoded) > _BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode())
    except ValueError:
        return False


def _encode_password(password: str) -> bytes:
    encoded = password.encode()
    if len(encoded) > _BCRYPT_MAX_BYTES:
        raise ValidationFailed(
            "Password is too long",
            details=[f"password: at most {_BCRYPT_MAX_BYTES} bytes"],
        )
    return encoded
