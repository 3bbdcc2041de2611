import secrets

from flask import current_app, request

from grant_tracker.types import ADMIN_KEY_HEADER


class AuthorisationHelper:
    @staticmethod
    def has_admin_key(provided_key: str | None) -> bool:
        if not provided_key:
            return False

        expected_key: str = current_app.config["ADMIN_PASSWORD"]
        return secrets.compare_digest(provided_key.encode(), expected_key.encode())

    @staticmethod
    def is_admin_request() -> bool:
        return AuthorisationHelper.has_admin_key(request.headers.get(ADMIN_KEY_HEADER))
