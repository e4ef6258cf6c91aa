"""
Session token codec

The token carries the whole identity record. It is signed so a tampered
token fails to decode, but it is still a mock credential: no revocation,
and no expiry unless TOKEN_EXPIRE_MINUTES is set.
"""
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from pydantic import ValidationError as SchemaError

from skillforge.config import settings
from skillforge.errors import InvalidToken
from skillforge.schemas.user import Identity


class TokenCodec:
    def __init__(self, secret_key: str = None, algorithm: str = None, expire_minutes: int = None):
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.expire_minutes = settings.TOKEN_EXPIRE_MINUTES if expire_minutes is None else expire_minutes

    def encode(self, identity: Identity) -> str:
        payload = identity.model_dump(mode="json")
        payload["sub"] = identity.id
        if self.expire_minutes > 0:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        """Return the identity inside the token or raise InvalidToken"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return Identity.model_validate(payload)
        except (JWTError, SchemaError, AttributeError) as e:
            raise InvalidToken(f"Invalid token: {e}")


# Global instance
token_codec = TokenCodec()
