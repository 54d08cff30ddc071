"""
Exception hierarchy for the Last.fm scrobble client.

Every failure is raised as a ScrobbleError subclass so callers can branch:

- AuthParamError: bad or missing credentials, found before any I/O.
- DispatchError: the request could not be sent or the service refused it.
- ResponseError: the service answered with something we cannot use.
- BatchError / NotAuthenticated: local preconditions, always avoidable.
- AuthenticationError / SubmissionError: high-level wrappers that prefix the
  underlying message with the operation that failed.
"""

from __future__ import annotations

# Last.fm error codes we let callers branch on
AUTH_ERROR_CODES = (4, 9, 14)  # 4=Auth failed, 9=Invalid session, 14=Token not authorized
RATE_LIMIT_ERROR_CODES = (29,)


class ScrobbleError(Exception): ...


# -------------------------
# Credential errors
# -------------------------
class AuthParamError(ScrobbleError): ...

class MissingIdentity(AuthParamError):
    def __init__(self, message: str = "No user credentials or token have been set"):
        super().__init__(message)

class InvalidClientCredentials(AuthParamError):
    def __init__(self, message: str = "API key and API secret must both be non-empty"):
        super().__init__(message)

class IncompleteUserCredentials(AuthParamError):
    def __init__(self, message: str = "Username and password must both be non-empty"):
        super().__init__(message)

class InvalidSessionKey(AuthParamError, ValueError):
    def __init__(self, message: str = "Session key must be a non-empty string"):
        super().__init__(message)

class ConfigError(ScrobbleError, ValueError): ...


# -------------------------
# Dispatch errors
# -------------------------
class _ErrorCodeMixin:
    code: int | None

    @property
    def is_auth_error(self) -> bool:
        return self.code in AUTH_ERROR_CODES

    @property
    def is_rate_limited(self) -> bool:
        return self.code in RATE_LIMIT_ERROR_CODES


class DispatchError(ScrobbleError): ...

class NotAuthenticated(DispatchError):
    def __init__(self, message: str = "Client is not authenticated; no session key is set"):
        super().__init__(message)

class TransportError(DispatchError): ...

class BodyReadError(DispatchError): ...

class NonSuccessStatus(_ErrorCodeMixin, DispatchError):
    """Service answered with a non-2xx HTTP status.

    Last.fm usually puts an ``{"error": N, "message": "..."}`` document in the
    body of such responses; when it does, ``code`` and ``api_message`` carry it.
    """

    def __init__(self, status: int, code: int | None = None, api_message: str | None = None):
        self.status = status
        self.code = code
        self.api_message = api_message
        msg = f"HTTP {status}"
        if code is not None:
            msg += f" (Last.fm error {code}: {api_message})"
        super().__init__(msg)


# -------------------------
# Response errors
# -------------------------
class ResponseError(ScrobbleError): ...

class ResponseDecodeError(ResponseError): ...

class ApiError(_ErrorCodeMixin, ResponseError):
    def __init__(self, code: int | None, message: str):
        self.code = code
        self.api_message = message
        super().__init__(f"Last.fm API error {code}: {message}")


# -------------------------
# Batch preconditions
# -------------------------
class BatchError(ScrobbleError): ...

class EmptyBatch(BatchError):
    def __init__(self, message: str = "Scrobble batch is empty"):
        super().__init__(message)

class BatchTooLarge(BatchError):
    def __init__(self, size: int, limit: int = 50):
        self.size = size
        self.limit = limit
        super().__init__(f"Scrobble batch has {size} tracks; at most {limit} are allowed")


# -------------------------
# High-level wrappers
# -------------------------
class AuthenticationError(ScrobbleError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Authentication failed: {cause}")

class SubmissionError(ScrobbleError):
    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} request failed: {cause}")
