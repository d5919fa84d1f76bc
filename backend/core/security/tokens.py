"""
JWT token service for bearer authentication.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from core.domain.user import normalize_email
from core.errors import ForbiddenError, InvalidInputError, UnauthorizedError


@dataclass
class TokenPayload:
    """JWT token payload structure."""

    sub: str  # Subject (caller email)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at

    @property
    def email(self) -> str:
        return self.sub


class TokenService:
    """Service for issuing and verifying identity tokens.

    A single process-wide signing key is used for every token; there is no
    per-user secret.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_days: int = 7,
    ):
        """
        Initialize the token service.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            expire_days: Token lifetime in days
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_days = expire_days

    def create_access_token(self, email: str | None) -> str:
        """
        Issue a signed token binding the given email.

        The email is stored in its normalized form so it matches the key
        the user record is stored under.

        Args:
            email: Caller identity to encode in the token

        Returns:
            Encoded JWT

        Raises:
            InvalidInputError: If email is absent or blank
        """
        if not email or not email.strip():
            raise InvalidInputError("Email is required")

        email = normalize_email(email)
        now = datetime.now(UTC)
        payload = {
            "sub": email,
            "email": email,
            "iat": now,
            "exp": now + timedelta(days=self._expire_days),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload | None:
        """
        Decode and validate a JWT token.

        Returns:
            TokenPayload if valid, None if malformed, expired or badly signed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )

            for field in ("sub", "exp"):
                if field not in payload:
                    raise JWTError(f"Missing required field: {field}")

            return TokenPayload(
                sub=payload["sub"],
                exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
                iat=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
            )
        except JWTError:
            return None

    def verify(self, token: str | None) -> str:
        """
        Verify a presented credential and return the embedded email.

        Raises:
            UnauthorizedError: If no credential was presented
            ForbiddenError: If the credential is malformed, expired or invalid
        """
        if not token:
            raise UnauthorizedError("Unauthorized")

        payload = self.decode_token(token)
        if payload is None or not payload.sub:
            raise ForbiddenError("Forbidden access")
        return normalize_email(payload.email)
