"""Delivery of password reset instructions."""

import structlog

from codepath.domain.identity.entities.user import User

logger = structlog.get_logger(__name__)


class LoggingResetNotifier:
    """
    Notifier that only logs the reset request.

    Mail delivery is deployment specific; swap this provider in the
    container to send real emails.
    """

    def __init__(self, base_url: str = "/reset-password") -> None:
        self.base_url = base_url.rstrip("/")

    def send_reset_instructions(self, user: User, token: str) -> None:
        logger.info(
            "password_reset_link_issued",
            user_id=user.id.value,
            email=user.email,
            reset_path=f"{self.base_url}/{token}",
        )
