"""Role mapping configuration: friendly role labels → role codes.

Mappings are resolved in priority order:

1. ``ROLE_MAPPINGS_JSON`` environment setting (a JSON object)
2. The YAML mappings file (``role_mappings_file``)
3. Built-in defaults

Loaded mappings are layered over the defaults, so a source only needs to list
the labels it adds or overrides. The application keeps one instance on
``app.state`` and hands it out through a dependency.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from tenant_admin.domain.entities import to_iso, utc_now

logger = logging.getLogger(__name__)

DEFAULT_ROLE_MAPPINGS: dict[str, str] = {
    "Internal Root Admin": "INTERNAL_ROOT_ADMIN",
    "Internal Super Admin": "INTERNAL_SUPER_ADMIN",
    "Internal Standard Admin": "INTERNAL_STANDARD_ADMIN",
    "External Super Admin": "EXTERNAL_SUPER_ADMIN",
    "External Standard Admin": "EXTERNAL_STANDARD_ADMIN",
    "Lookup Manager": "LOOKUP_MANAGER",
    "Tenant Admin": "TENANT_ADMIN",
    "Tenant User": "TENANT_USER",
    "Service Admin": "SERVICE_ADMIN",
    "Service User": "SERVICE_USER",
}


class RoleMappingConfig:
    """Holds the active label → role code table and where it came from."""

    def __init__(self, *, env_json: str | None = None, file_path: str | Path | None = None):
        self._env_json = env_json
        self._file_path = Path(file_path) if file_path else None
        self._mappings: dict[str, str] = dict(DEFAULT_ROLE_MAPPINGS)
        self.source = "default"
        self.last_updated: datetime = utc_now()

    def load(self) -> "RoleMappingConfig":
        """Resolve mappings from the highest-priority source that yields any."""
        env_mappings = self._from_env()
        file_mappings = None if env_mappings is not None else self._from_file()

        if env_mappings is not None:
            self._mappings, self.source = {**DEFAULT_ROLE_MAPPINGS, **env_mappings}, "environment"
        elif file_mappings is not None:
            self._mappings, self.source = {**DEFAULT_ROLE_MAPPINGS, **file_mappings}, "file"
        else:
            self._mappings, self.source = dict(DEFAULT_ROLE_MAPPINGS), "default"

        self.last_updated = utc_now()
        logger.info("Role mappings loaded from %s (%d entries)", self.source, len(self._mappings))
        return self

    def reload(self) -> "RoleMappingConfig":
        logger.info("Reloading role mappings")
        return self.load()

    def _from_env(self) -> dict[str, str] | None:
        if not self._env_json:
            return None
        try:
            data = json.loads(self._env_json)
        except json.JSONDecodeError as exc:
            logger.warning("Could not parse ROLE_MAPPINGS_JSON: %s", exc)
            return None
        return _as_mapping(data, "environment")

    def _from_file(self) -> dict[str, str] | None:
        if self._file_path is None or not self._file_path.is_file():
            return None
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            logger.exception("Failed to read role mappings file: %s", self._file_path)
            return None
        if isinstance(data, dict) and "mappings" in data:
            data = data["mappings"]
        return _as_mapping(data, str(self._file_path))

    # ── Lookups and edits ────────────────────────────────────────────

    def get_mapping(self, role_name: str | None) -> str | None:
        """Role code for an exact label, or ``None``."""
        if not role_name:
            return None
        return self._mappings.get(role_name)

    def all_mappings(self) -> dict[str, str]:
        return dict(self._mappings)

    def add_mapping(self, role_name: str, role_code: str) -> None:
        self._mappings[role_name] = role_code
        self.last_updated = utc_now()

    def remove_mapping(self, role_name: str) -> None:
        self._mappings.pop(role_name, None)
        self.last_updated = utc_now()

    def status(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "lastUpdated": to_iso(self.last_updated),
            "mappingCount": len(self._mappings),
        }


def _as_mapping(data: Any, origin: str) -> dict[str, str] | None:
    if not isinstance(data, dict):
        logger.warning("Role mappings from %s are not a mapping; ignoring", origin)
        return None
    return {str(k): str(v) for k, v in data.items()}
