import logging

from .bookmarks import Bookmarks
from .client import PortalClient
from .config import AppConfig, ClientConfig, EnvConfig, PathConfig
from .events import Events
from .exceptions import (
    FireflyAPIError,
    FireflyConstructionError,
    FireflyException,
    FireflyNoDeviceIdError,
    FireflyNotAuthenticatedError,
    FireflyParsingError,
    FireflySchoolNotFoundError,
    TransportError,
)
from .groups import Groups
from .logger import setup_logger
from .messages import Messages
from .objects import (
    Bookmark,
    Event,
    Group,
    HostDescriptor,
    Message,
    Principal,
    SchoolClass,
    SessionCredentials,
    Task,
    User,
)
from .school import get_host
from .session import AuthState, Firefly
from .tasks import Tasks
from .token import credentials_from_json, credentials_to_json, parse_auth_token

__all__ = [
    "PathConfig",
    "EnvConfig",
    "AppConfig",
    "ClientConfig",
    "Firefly",
    "AuthState",
    "PortalClient",
    "get_host",
    "logger",
    "Events",
    "Messages",
    "Bookmarks",
    "Groups",
    "Tasks",
    "User",
    "SchoolClass",
    "SessionCredentials",
    "HostDescriptor",
    "Principal",
    "Event",
    "Message",
    "Bookmark",
    "Group",
    "Task",
    "parse_auth_token",
    "credentials_to_json",
    "credentials_from_json",
    # Exceptions
    "FireflyException",
    "FireflyConstructionError",
    "FireflyParsingError",
    "FireflyNotAuthenticatedError",
    "FireflyNoDeviceIdError",
    "FireflySchoolNotFoundError",
    "FireflyAPIError",
    "TransportError",
]

logger = setup_logger(logging.WARNING)
