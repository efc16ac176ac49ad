"""
Credential service: password hashing and signed bearer tokens
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from itsdangerous import BadPayload, BadSignature, URLSafeSerializer
from passlib.context import CryptContext


# pbkdf2_sha256: no native deps
pwd_context = CryptContext(schemes=["pbkdf2_sha256"])

_TOKEN_SALT = "fintrack-access-token"


class TokenError(Exception):
    """Base class for token verification failures"""


class TokenInvalid(TokenError):
    """Signature does not verify (tampered or signed with another key)"""


class TokenExpired(TokenError):
    """Signature is valid but the expiration instant has passed"""


class TokenMalformed(TokenError):
    """Token is not structurally a token or lacks required claims"""


@dataclass(frozen=True)
class TokenConfig:
    """Signing key and lifetime, built once at startup"""
    secret_key: str
    lifetime: timedelta = timedelta(hours=24)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    username: str
    expires_at: datetime


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """
    Check a password against a stored hash.

    A malformed or unrecognized hash returns False after doing the same amount
    of hashing work as a real check.
    """
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        pwd_context.dummy_verify()
        return False


def dummy_verify() -> None:
    """Spend one verification worth of work (used when the user is unknown)"""
    pwd_context.dummy_verify()


class CredentialService:
    """
    Issues and verifies stateless bearer tokens.

    Tokens are itsdangerous-signed JSON carrying sub/email/username/exp.
    Expiration is fixed at issuance (no sliding renewal).
    """

    def __init__(self, config: TokenConfig):
        self.config = config
        self._serializer = URLSafeSerializer(config.secret_key, salt=_TOKEN_SALT)

    def hash_password(self, password: str) -> str:
        return hash_password(password)

    def verify_password(self, password_hash: str, password: str) -> bool:
        return verify_password(password_hash, password)

    def issue_token(
        self,
        user_id: int,
        email: str,
        username: str,
        expires_at: datetime | None = None,
    ) -> str:
        """
        Create a signed token for the given identity

        Args:
            user_id: User ID (sub claim)
            email: User email
            username: User name
            expires_at: Expiration instant (default: now + configured lifetime)

        Returns:
            URL-safe token string
        """
        if expires_at is None:
            expires_at = datetime.now(timezone.utc) + self.config.lifetime

        payload = {
            "sub": user_id,
            "email": email,
            "username": username,
            "exp": int(expires_at.timestamp()),
        }
        return self._serializer.dumps(payload)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims

        Raises:
            TokenMalformed: not a token, undecodable payload, missing claims
            TokenInvalid: bad signature
            TokenExpired: past the exp claim
        """
        if not token or "." not in token:
            raise TokenMalformed("token is not in signed form")

        try:
            payload = self._serializer.loads(token)
        except BadPayload as e:
            raise TokenMalformed("token payload cannot be decoded") from e
        except BadSignature as e:
            raise TokenInvalid("token signature does not match") from e

        claims = self._parse_claims(payload)

        if claims.expires_at <= datetime.now(timezone.utc):
            raise TokenExpired("token has expired")

        return claims

    @staticmethod
    def _parse_claims(payload) -> TokenClaims:
        if not isinstance(payload, dict):
            raise TokenMalformed("token payload is not an object")

        user_id = payload.get("sub")
        email = payload.get("email")
        username = payload.get("username")
        exp = payload.get("exp")

        if (
            not isinstance(user_id, int)
            or isinstance(user_id, bool)
            or not isinstance(email, str)
            or not isinstance(username, str)
            or not isinstance(exp, (int, float))
        ):
            raise TokenMalformed("token is missing required claims")

        return TokenClaims(
            user_id=user_id,
            email=email,
            username=username,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
