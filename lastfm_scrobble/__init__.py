"""Client for the Last.fm Scrobble API 2.0: authentication, request signing,
now-playing and scrobble submission."""

from .client import API_URL, LastFmClient
from .credentials import Credentials, Identity, Token, UserPassword
from .errors import (
    ApiError, AuthenticationError, AuthParamError, BatchError, BatchTooLarge, ConfigError,
    BodyReadError, DispatchError, EmptyBatch, IncompleteUserCredentials,
    InvalidClientCredentials, InvalidSessionKey, MissingIdentity,
    NonSuccessStatus, NotAuthenticated, ResponseDecodeError, ResponseError,
    ScrobbleError, SubmissionError, TransportError,
)
from .models import MAX_BATCH_SIZE, Scrobble, ScrobbleBatch
from .operations import Operation
from .responses import (
    BatchScrobbleResponse, CorrectableString, NowPlayingResponse,
    ScrobbleResponse, SessionResponse,
)
from .scrobbler import Scrobbler
from .signature import md5_digest, sign
from .transport import RequestsTransport, Transport, TransportResponse

__version__ = "0.1.0"
