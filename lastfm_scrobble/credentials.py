from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .errors import (
    IncompleteUserCredentials, InvalidClientCredentials,
    InvalidSessionKey, MissingIdentity,
)
from .signature import Digest, md5_digest, sign


# -------------------------
# User identity: exactly one of these at a time
# -------------------------
@dataclass(frozen=True)
class UserPassword:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"UserPassword(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class Token:
    token: str


Identity = UserPassword | Token


class Credentials:
    """API identity, user identity and (once authenticated) the session key.

    Any change of user identity drops the session key: a new identity never
    reuses the previous user's session.
    """

    def __init__(self, api_key: str, api_secret: str, digest: Digest = md5_digest):
        if not api_key or not api_secret:
            raise InvalidClientCredentials()
        self._api_key = api_key
        self._api_secret = api_secret
        self._digest = digest
        self._identity: Identity | None = None
        self._session_key: str | None = None

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def api_secret(self) -> str:
        return self._api_secret

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def session_key(self) -> str | None:
        return self._session_key

    # -------- identity / session --------
    def set_user_credentials(self, username: str, password: str) -> None:
        self._identity = UserPassword(username, password)
        self._session_key = None

    def set_user_token(self, token: str) -> None:
        self._identity = Token(token)
        self._session_key = None

    def set_session_key(self, key: str) -> None:
        if not key:
            raise InvalidSessionKey()
        self._session_key = key

    def is_authenticated(self) -> bool:
        return self._session_key is not None

    # -------- request parameters --------
    def get_auth_request_params(self) -> dict[str, str]:
        if self._identity is None:
            raise MissingIdentity()
        if not self._api_key or not self._api_secret:
            raise InvalidClientCredentials()

        params = {"api_key": self._api_key}
        if isinstance(self._identity, UserPassword):
            if not self._identity.username or not self._identity.password:
                raise IncompleteUserCredentials()
            params["username"] = self._identity.username
            params["password"] = self._identity.password
        else:
            params["token"] = self._identity.token
        return params

    def get_request_params(self) -> dict[str, str]:
        # sk is "" when unauthenticated; LastFmClient refuses to send in that state
        return {"api_key": self._api_key, "sk": self._session_key or ""}

    def get_signature(self, method: str, params: Mapping[str, str]) -> str:
        return sign(params, method, self._api_secret, self._digest)

    def __repr__(self) -> str:
        return (f"Credentials(api_key={self._api_key!r}, identity={self._identity!r}, "
                f"authenticated={self.is_authenticated()})")
