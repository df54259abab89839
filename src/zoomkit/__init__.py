"""
zoomkit - Typed client for the Zoom REST API
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("zoomkit")
except PackageNotFoundError:
    # Fallback for editable/uninstalled checkouts
    __version__ = "0.dev0"
__author__ = "zoomkit"
__description__ = "Typed Zoom API client with S2S OAuth, error taxonomy and paged collections"

from .client import ApiResponse, ZoomClient
from .config import Config, OAuth2Settings
from .credentials import BearerToken, CachedToken, MachineCredential
from .enums import MeetingType, ParticipantStatus, UserType
from .exceptions import (
    AuthenticationError,
    ConfigError,
    ConnectionFailureError,
    ErrorKind,
    NotFoundError,
    ValidationError,
    ZoomAPIError,
    ZoomkitError,
    classify_error,
)
from .logger import setup_logging
from .models import Meeting, Participant, Registrant, User, UserSettings
from .oauth import OAuth2Client
from .paged import (
    MeetingCollection,
    PagedCollection,
    ParticipantCollection,
    RegistrantCollection,
    UserCollection,
    iter_pages,
)
from .pagination import PaginationEnvelope
from .token_provider import TokenProvider

__all__ = [
    "ZoomClient",
    "ApiResponse",
    "TokenProvider",
    "BearerToken",
    "MachineCredential",
    "CachedToken",
    "Config",
    "OAuth2Settings",
    "OAuth2Client",
    "PaginationEnvelope",
    "PagedCollection",
    "MeetingCollection",
    "UserCollection",
    "ParticipantCollection",
    "RegistrantCollection",
    "iter_pages",
    "Meeting",
    "User",
    "Participant",
    "Registrant",
    "UserSettings",
    "MeetingType",
    "UserType",
    "ParticipantStatus",
    "ZoomkitError",
    "ZoomAPIError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "ConnectionFailureError",
    "ConfigError",
    "ErrorKind",
    "classify_error",
    "setup_logging",
    "__version__",
]
