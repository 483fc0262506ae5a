from __future__ import annotations


class CrossBenchError(Exception):
    pass


class ConfigurationError(CrossBenchError):
    pass


class FetchError(CrossBenchError):
    def __init__(self, endpoint: str, attempts: int, last_error: str | None = None):
        self.endpoint = endpoint
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error}" if last_error else ""
        super().__init__(f"No data from {endpoint} after {attempts} attempts{detail}")


class APIError(CrossBenchError):
    """Non-2xx answer from the leaderboard endpoint; the body is truncated for the message."""

    excerpt_length = 200

    def __init__(self, endpoint: str, status_code: int, reason: str = "", response_body: str = ""):
        self.endpoint = endpoint
        self.status_code = status_code
        self.reason = reason
        self.response_body = response_body
        message = f"{endpoint} answered {status_code} {reason}".rstrip()
        excerpt = response_body[: self.excerpt_length]
        if excerpt:
            message += f": {excerpt}"
        super().__init__(message)

    @classmethod
    def from_status(cls, endpoint: str, status_code: int, reason: str = "", response_body: str = "") -> APIError:
        """Pick the subclass that matches ``status_code``."""
        if status_code >= 500:
            kind: type[APIError] = ServerError
        else:
            kind = _CLIENT_ERRORS.get(status_code, cls)
        return kind(endpoint, status_code, reason, response_body)


class NotFoundError(APIError):
    pass


class RateLimitError(APIError):
    pass


class ServerError(APIError):
    pass


_CLIENT_ERRORS: dict[int, type[APIError]] = {404: NotFoundError, 429: RateLimitError}


class PayloadError(CrossBenchError):
    pass


class MalformedRecordError(CrossBenchError):
    pass


class DuplicateModelError(CrossBenchError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Model already registered: {name}")


__all__ = [
    "CrossBenchError",
    "ConfigurationError",
    "FetchError",
    "APIError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "PayloadError",
    "MalformedRecordError",
    "DuplicateModelError",
]
