from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from .config import DEFAULT_TIMEOUT
from .exceptions import FireflySchoolNotFoundError
from .objects import HostDescriptor
from .token import parse_xml

__all__ = ["APP_GATEWAY_URL", "get_host"]

logger = logging.getLogger(__name__)

APP_GATEWAY_URL = "https://appgateway.fireflysolutions.co.uk/appgateway/school/"


def get_host(school_code: str, timeout: float = DEFAULT_TIMEOUT) -> HostDescriptor:
    """
    Resolve a school code (as typed into the Firefly app) to the school's portal.

    Example:
    -------
    >>> get_host("billanook").url
    'https://billanook.fireflycloud.net'

    Raises:
        FireflySchoolNotFoundError: The code is empty or unknown to the app gateway.
        FireflyParsingError: The gateway's reply was not XML.
        requests.RequestException: Any other transport failure, untouched.
    """
    school_code = (school_code or "").strip()
    if not school_code:
        raise FireflySchoolNotFoundError(school_code)

    url = APP_GATEWAY_URL + quote(school_code, safe="")
    logger.debug(f"Looking up school code {school_code!r} via {url}")

    response = requests.get(url, timeout=timeout)
    if response.status_code == 404:
        logger.info(f"App gateway does not know school code {school_code!r}")
        raise FireflySchoolNotFoundError(school_code)
    response.raise_for_status()

    root = parse_xml(response.content, "school lookup reply")
    if root.get("exists", "false").lower() != "true":
        raise FireflySchoolNotFoundError(school_code)

    address = root.find("address")
    host = (address.text or "").strip() if address is not None else ""
    if not host:
        raise FireflySchoolNotFoundError(school_code)

    ssl = address.get("ssl", "true").lower() == "true"
    name = root.findtext("name") or ""
    descriptor = HostDescriptor(
        host=host,
        url=("https://" if ssl else "http://") + host,
        name=name.strip(),
        enabled=root.get("enabled", "true").lower() == "true",
        ssl=ssl,
        installation_id=(root.findtext("installationId") or "").strip(),
    )
    logger.debug(f"School code {school_code!r} resolved to {descriptor.url}")
    return descriptor
