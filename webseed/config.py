"""Runtime configuration resolved once from environment variables.

Values are read a single time when ``Settings.from_env`` is called and are
immutable afterwards. The resulting object is handed to the application
builder explicitly; nothing in the package reads ``os.environ`` on its own.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Mapping, Optional

from webseed import __version__

DEFAULT_PORT: Final[int] = 11706
BIND_HOST: Final[str] = "0.0.0.0"

# Environment variable -> default. Order mirrors the Settings fields below.
ENV_DEFAULTS: Final[dict[str, str]] = {
    "ENV": "local",
    "COMPONENT": "web-seed",
    "GROUP": "tool",
    "HOST": "local",
    "APPS": "unknown",
    "USER": "unknown",
    "DATA_CENTRE": "sd16",
    "ZONE": "DRN",
    "COUNTRY": "srb",
    "DNS_ALIAS": "",
    "LOCAL_MODE": "false",
    "VERSION": __version__,
    "LOG_LEVEL": "INFO",
}


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    env: str = ENV_DEFAULTS["ENV"]
    app_name: str = ENV_DEFAULTS["COMPONENT"]
    group: str = ENV_DEFAULTS["GROUP"]
    host: str = ENV_DEFAULTS["HOST"]
    app_root: str = ENV_DEFAULTS["APPS"]
    user: str = ENV_DEFAULTS["USER"]
    data_centre: str = ENV_DEFAULTS["DATA_CENTRE"]
    zone: str = ENV_DEFAULTS["ZONE"]
    country: str = ENV_DEFAULTS["COUNTRY"]
    dns_alias: str = ENV_DEFAULTS["DNS_ALIAS"]
    local_mode: str = ENV_DEFAULTS["LOCAL_MODE"]
    version: str = ENV_DEFAULTS["VERSION"]
    log_level: str = ENV_DEFAULTS["LOG_LEVEL"]
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, *, port: int = DEFAULT_PORT) -> Settings:
        """Resolve settings from ``environ`` (defaults to ``os.environ``).

        Unset variables fall back to the documented default; set variables are
        taken literally, including empty strings.
        """
        source = os.environ if environ is None else environ

        def _get(name: str) -> str:
            return source.get(name, ENV_DEFAULTS[name])

        log_file = source.get("LOG_FILE")
        return cls(
            port=port,
            env=_get("ENV"),
            app_name=_get("COMPONENT"),
            group=_get("GROUP"),
            host=_get("HOST"),
            app_root=_get("APPS"),
            user=_get("USER"),
            data_centre=_get("DATA_CENTRE"),
            zone=_get("ZONE"),
            country=_get("COUNTRY"),
            dns_alias=_get("DNS_ALIAS"),
            local_mode=_get("LOCAL_MODE"),
            version=_get("VERSION"),
            log_level=_get("LOG_LEVEL"),
            log_file=log_file if log_file else None,
        )

    @property
    def is_local_mode(self) -> bool:
        return self.local_mode.strip().lower() in {"1", "true", "yes", "on"}

    @property
    def bind_address(self) -> str:
        return f"{BIND_HOST}:{self.port}"

    def public_view(self) -> dict[str, str | int | bool]:
        """Settings exposed over the API (log destination omitted)."""
        return {
            "app_name": self.app_name,
            "version": self.version,
            "env": self.env,
            "group": self.group,
            "host": self.host,
            "app_root": self.app_root,
            "user": self.user,
            "data_centre": self.data_centre,
            "zone": self.zone,
            "country": self.country,
            "dns_alias": self.dns_alias,
            "local_mode": self.is_local_mode,
            "port": self.port,
        }
