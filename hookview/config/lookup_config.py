"""Centralized helpers to resolve the viewer settings from the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union


PROJECT_ROOT = Path(__file__).resolve().parents[2]


def parse_env_file(path: Path) -> Dict[str, str]:
    """Return the ``KEY=VALUE`` pairs of ``path``; missing or unreadable files yield nothing.

    Blank lines and ``#`` comments are skipped, an optional ``export`` prefix is
    accepted and one level of matching quotes is removed from values.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


class LookupConfiguration:
    """Lookup endpoint and UI settings read from ``HOOKVIEW_*`` variables.

    ``env_files`` are read in order (relative paths from the project root) and
    the process environment, or ``environ`` when given, overrides them.
    """

    DEFAULT_ENV_FILES: tuple[str, ...] = (".env",)
    DEFAULT_BASE_URL = "http://localhost:8080"
    DEFAULT_TIMEOUT_SECONDS = 30.0
    DEFAULT_MAX_RESPONSE_BYTES = 30 * 1024 * 1024
    DEFAULT_RESOURCE_TYPES = "departures:Departures,arrivals:Arrivals"
    DEFAULT_THEME = "flatly"
    DEFAULT_LOG_LEVEL = "INFO"

    def __init__(
        self,
        env_files: Optional[Iterable[Union[str, Path]]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        settings: Dict[str, str] = {}
        for candidate in env_files if env_files is not None else self.DEFAULT_ENV_FILES:
            path = Path(candidate)
            settings.update(parse_env_file(path if path.is_absolute() else PROJECT_ROOT / path))
        settings.update(os.environ if environ is None else environ)
        self._settings = settings

    def _get(self, key: str) -> str:
        return self._settings.get(key, "").strip()

    def get_base_url(self) -> str:
        """Return the root URL of the lookup service without a trailing slash."""

        return (self._get("HOOKVIEW_BASE_URL") or self.DEFAULT_BASE_URL).rstrip("/")

    def get_timeout_seconds(self) -> float:
        """Return the HTTP timeout applied to each lookup."""

        raw = self._get("HOOKVIEW_TIMEOUT_SECONDS")
        try:
            value = float(raw) if raw else self.DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            return self.DEFAULT_TIMEOUT_SECONDS
        return value if value > 0 else self.DEFAULT_TIMEOUT_SECONDS

    def get_max_response_bytes(self) -> int:
        """Return the largest response body accepted from the endpoint."""

        raw = self._get("HOOKVIEW_MAX_RESPONSE_BYTES")
        try:
            value = int(raw) if raw else self.DEFAULT_MAX_RESPONSE_BYTES
        except ValueError:
            return self.DEFAULT_MAX_RESPONSE_BYTES
        return value if value > 0 else self.DEFAULT_MAX_RESPONSE_BYTES

    def get_resource_types(self) -> List[Tuple[str, str]]:
        """Return the ``(value, display name)`` pairs offered in the type selector.

        The setting is a comma separated list of ``value:Display`` items; a
        missing display name falls back to the capitalized value.
        """

        raw = self._get("HOOKVIEW_RESOURCE_TYPES") or self.DEFAULT_RESOURCE_TYPES
        types: List[Tuple[str, str]] = []
        seen = set()
        for item in raw.split(","):
            value, _, display = item.partition(":")
            value = value.strip()
            if not value or value in seen:
                continue
            seen.add(value)
            types.append((value, display.strip() or value.capitalize()))
        return types

    def get_theme(self) -> str:
        """Return the ttkbootstrap theme name used by the main window."""

        return self._get("HOOKVIEW_THEME") or self.DEFAULT_THEME

    def get_log_level(self) -> str:
        """Return the logging level name configured for the application."""

        return (self._get("HOOKVIEW_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL).upper()
