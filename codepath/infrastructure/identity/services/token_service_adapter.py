from codepath.infrastructure.identity.services import token_service
from codepath.infrastructure.identity.services.token_service import TokenWithRefresh


class TokenServiceAdapter:
    """Exposes the JWT functions through TokenServiceProtocol."""

    def create_token_pair(self, user_id: int) -> TokenWithRefresh:
        return token_service.create_token_pair(user_id)

    def verify_access_token(self, token: str) -> int | None:
        return token_service.verify_access_token(token)

    def verify_refresh_token(self, token: str) -> int | None:
        return token_service.verify_refresh_token(token)
