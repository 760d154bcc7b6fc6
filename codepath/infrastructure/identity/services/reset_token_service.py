"""Password reset token generation."""

import hashlib
import secrets

RESET_TOKEN_BYTES = 32


class ResetTokenService:
    """Random URL-safe reset tokens; only their SHA-256 digest is persisted."""

    def generate(self) -> tuple[str, str]:
        token = secrets.token_urlsafe(RESET_TOKEN_BYTES)
        return token, self.hash_token(token)

    def hash_token(self, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
