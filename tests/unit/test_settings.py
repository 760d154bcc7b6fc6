import pytest
from pydantic import ValidationError

from codepath.config import Settings


class TestSettings:
    def test_signing_key_has_no_builtin_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SECRET_KEY", raising=False)

        settings = Settings(_env_file=None, ENVIRONMENT="development")

        assert settings.SECRET_KEY == ""

    def test_production_without_signing_key_is_refused(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SECRET_KEY", raising=False)

        with pytest.raises(ValidationError, match="SECRET_KEY is required in production"):
            Settings(_env_file=None, ENVIRONMENT="production")

    def test_production_with_blank_signing_key_is_refused(self) -> None:
        with pytest.raises(ValidationError, match="SECRET_KEY is required in production"):
            Settings(_env_file=None, ENVIRONMENT="production", SECRET_KEY="   ")

    def test_production_with_signing_key_is_accepted(self) -> None:
        settings = Settings(
            _env_file=None, ENVIRONMENT="production", SECRET_KEY="a-real-deployment-secret"
        )

        assert settings.SECRET_KEY == "a-real-deployment-secret"

    def test_update_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match="MAX_UPDATE_ATTEMPTS"):
            Settings(_env_file=None, MAX_UPDATE_ATTEMPTS=0)
