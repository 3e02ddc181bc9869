"""
Parsing of what the portal hands back during login, and (de)serialisation of the
resulting credentials so a session can be restored in a later run.

The authentication token looks like::

    <token>
        <secret>...</secret>
        <user username="" fullname="" email="" role="" guid="">
            <classes>
                <class guid="" name="" subject=""/>
            </classes>
        </user>
    </token>
"""
from __future__ import annotations

import json
import logging

from lxml import etree

from .exceptions import FireflyParsingError
from .objects import SchoolClass, SessionCredentials, User

__all__ = ["parse_xml", "parse_auth_token", "parse_api_version", "credentials_to_json", "credentials_from_json"]

logger = logging.getLogger(__name__)

_USER_ATTRIBUTES = ("username", "fullname", "email", "role", "guid")
_CLASS_ATTRIBUTES = ("guid", "name", "subject")


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_xml(xml: str | bytes, what: str = "XML") -> etree._Element:
    """Parse a document, turning every way it can be broken into a FireflyParsingError."""
    if isinstance(xml, str):
        xml = xml.encode("utf8")
    if not xml or not xml.strip():
        raise FireflyParsingError(f"Empty {what}")

    try:
        return etree.fromstring(xml, parser=_xml_parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.warning(f"Could not parse {what}: {e}")
        raise FireflyParsingError(f"Invalid {what}: {e}") from e


def parse_auth_token(xml: str | bytes) -> SessionCredentials:
    """
    Turn the XML token returned by the login page into credentials.

    The result carries no device id, that belongs to the session which asked for the token.

    Raises:
        FireflyParsingError: The token is not well-formed, or lacks a secret or a user.
    """
    root = parse_xml(xml, "authentication token")

    secret_node = root.find(".//secret")
    secret = (secret_node.text or "").strip() if secret_node is not None else ""
    if not secret:
        raise FireflyParsingError("Authentication token has no <secret>")

    user_node = root.find(".//user")
    if user_node is None:
        raise FireflyParsingError("Authentication token has no <user>")

    user = User(**{attr: user_node.get(attr, "") for attr in _USER_ATTRIBUTES})
    classes = [
        SchoolClass(**{attr: class_node.get(attr, "") for attr in _CLASS_ATTRIBUTES})
        for class_node in user_node.iterfind("./classes/class")
    ]

    logger.debug(f"Parsed token for {user.username!r} with {len(classes)} classes")
    return SessionCredentials(secret=secret, user=user, classes=classes)


def parse_api_version(xml: str | bytes) -> str:
    """`<version><majorVersion>1</majorVersion>...</version>` -> "1.2.3"."""
    root = parse_xml(xml, "API version")

    parts = []
    for tag in ("majorVersion", "minorVersion", "incrementVersion"):
        node = root.find(f".//{tag}")
        if node is None or not (node.text or "").strip():
            raise FireflyParsingError(f"API version reply has no <{tag}>")
        parts.append(node.text.strip())

    return ".".join(parts)


def credentials_to_json(credentials: SessionCredentials) -> str:
    return json.dumps(
        {
            "deviceId": credentials.device_id,
            "secret": credentials.secret,
            "user": credentials.user.to_dict() if credentials.user else None,
            "classes": [school_class.to_dict() for school_class in credentials.classes],
        }
    )


def credentials_from_json(text: str | bytes) -> SessionCredentials:
    """
    Inverse of `credentials_to_json`.

    Raises:
        FireflyParsingError: The text is not JSON, or not shaped like an export.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise FireflyParsingError(f"Invalid credentials JSON: {e}") from e

    if not isinstance(data, dict):
        raise FireflyParsingError("Credentials JSON must be an object")

    user = data.get("user")
    if user is not None and not isinstance(user, dict):
        raise FireflyParsingError("Credentials JSON: 'user' must be an object")

    classes = data.get("classes")
    if classes is None:
        classes = []
    if not isinstance(classes, list) or not all(isinstance(c, dict) for c in classes):
        raise FireflyParsingError("Credentials JSON: 'classes' must be a list of objects")

    for key in ("deviceId", "secret"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise FireflyParsingError(f"Credentials JSON: {key!r} must be a string")

    secret = data.get("secret") or None
    user = User.from_dict(user) if user else None
    if secret is None or user is None:
        # secret and user only ever travel together
        secret, user = None, None

    return SessionCredentials(
        device_id=data.get("deviceId") or None,
        secret=secret,
        user=user,
        classes=[SchoolClass.from_dict(c) for c in classes],
    )
