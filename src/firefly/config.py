from __future__ import annotations

import os
from abc import ABC
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .exceptions import FireflyConstructionError

DEFAULT_APP_ID = "Firefly Node.JS Driver"
DEFAULT_TIMEOUT = 30


@dataclass
class ClientConfig(ABC):
    host: str = field(default=None)
    app_id: str = field(default=DEFAULT_APP_ID)
    device_id: str | None = field(default=None)
    school_code: str | None = field(default=None)
    timeout: float = field(default=DEFAULT_TIMEOUT)

    other_info: dict | None = None

    def validate(self) -> None:
        self.host = (self.host or "").strip().rstrip("/")
        self.app_id = (self.app_id or "").strip() or DEFAULT_APP_ID
        self.device_id = (self.device_id or "").strip() or None
        self.school_code = (self.school_code or "").strip() or None
        self.timeout = float(self.timeout or DEFAULT_TIMEOUT)

        if not self.host:
            raise FireflyConstructionError("A Firefly host is required, e.g. https://school.fireflycloud.net")


@dataclass
class PathConfig(ClientConfig):
    filename: str | Path = field(default=Path.cwd().joinpath("firefly.yml"))

    def __post_init__(self):
        self.filename = Path(self.filename)

        config_file: dict = yaml.safe_load(self.filename.read_text(encoding="utf8")) or {}
        self.host = config_file.pop("host", None)
        self.app_id = config_file.pop("app_id", None) or DEFAULT_APP_ID
        self.device_id = config_file.pop("device_id", None)
        self.school_code = config_file.pop("school_code", None)
        self.timeout = config_file.pop("timeout", None) or DEFAULT_TIMEOUT

        self.other_info = config_file


@dataclass
class EnvConfig(ClientConfig):
    def __post_init__(self):
        self.host = os.getenv("FIREFLY_HOST")
        self.app_id = os.getenv("FIREFLY_APP_ID") or DEFAULT_APP_ID
        self.device_id = os.getenv("FIREFLY_DEVICE_ID")
        self.school_code = os.getenv("FIREFLY_SCHOOL_CODE")
        self.timeout = os.getenv("FIREFLY_TIMEOUT") or DEFAULT_TIMEOUT


@dataclass
class AppConfig(ClientConfig):
    def __init__(self, host, app_id=DEFAULT_APP_ID, device_id=None, school_code=None, timeout=DEFAULT_TIMEOUT):
        self.host = host
        self.app_id = app_id
        self.device_id = device_id
        self.school_code = school_code
        self.timeout = timeout
        self.other_info = None
