"""Bearer token issuing and verification."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt

from travel_stories.errors import AuthError

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"


@dataclass
class TokenService:
    """Signs and checks access tokens carrying a user id claim."""

    secret: str
    algorithm: str = "HS256"
    expire_hours: int = 72

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        """Return a signed token for the user."""
        issued_at = now or datetime.now(tz=UTC)
        claims = {
            USER_ID_CLAIM: str(user_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(hours=self.expire_hours),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> UUID:
        """Return the user id from a valid token or raise AuthError."""
        if not token:
            raise AuthError("Missing authentication token")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise AuthError("Invalid or expired token") from exc
        raw_user_id = payload.get(USER_ID_CLAIM)
        try:
            return UUID(str(raw_user_id))
        except ValueError as exc:
            raise AuthError("Invalid token payload") from exc
