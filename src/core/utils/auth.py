"""HTTP Basic authentication for the upload endpoint."""

import base64
import binascii
import hmac

from aws_lambda_powertools import Logger

from core.models.errors import AuthenticationError

logger = Logger(UTC=True)

_SCHEME = "basic"


class BasicAuthenticator:
    """Checks an Authorization header against one configured credential pair."""

    def __init__(self, *, username: str, password: str) -> None:
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")

    def authenticate(self, authorization: str | None) -> str:
        """Validate a Basic Authorization header.

        Args:
            authorization: Raw ``Authorization`` header value

        Returns:
            The authenticated username

        Raises:
            AuthenticationError: If the header is missing, malformed,
                or carries the wrong credentials
        """
        if not authorization:
            raise AuthenticationError(message="Missing credentials")

        scheme, _, encoded = authorization.strip().partition(" ")
        if scheme.lower() != _SCHEME or not encoded:
            raise AuthenticationError(message="Unsupported authorization scheme")

        try:
            decoded = base64.b64decode(encoded.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AuthenticationError(message="Malformed credentials") from exc

        username, separator, password = decoded.partition(b":")
        if not separator:
            raise AuthenticationError(message="Malformed credentials")

        # Both comparisons always run so timing does not reveal which part failed.
        user_ok = hmac.compare_digest(username, self._username)
        password_ok = hmac.compare_digest(password, self._password)

        if not (user_ok and password_ok):
            logger.warning("Rejected upload credentials")
            raise AuthenticationError(message="Invalid credentials")

        return username.decode("utf-8", errors="replace")
