"""HTTP client to query the resource lookup endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import requests

from hookview.dtos.resource_record import ResourceQuery


logger = logging.getLogger(__name__)


class LookupClientError(RuntimeError):
    """Raised when the lookup endpoint cannot answer a query."""


class ResourceLookupClient:
    """Small wrapper around ``GET /l/{type}/{id}``."""

    DEFAULT_BASE_URL = "http://localhost:8080"
    LOOKUP_PREFIX = "/l"
    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = 30.0,
        max_response_bytes: int = 30 * 1024 * 1024,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Store configuration for subsequent lookups."""

        self._base_url = (base_url or self.DEFAULT_BASE_URL).strip().rstrip("/")
        self._timeout = timeout_seconds
        self._max_bytes = max_response_bytes
        self._session = session if session is not None else requests.Session()

    def build_url(self, query: ResourceQuery) -> str:
        """Return the lookup URL with both path segments percent-encoded."""

        return "{0}{1}/{2}/{3}".format(
            self._base_url,
            self.LOOKUP_PREFIX,
            quote(query.resourceType, safe=""),
            quote(query.resourceId, safe=""),
        )

    def fetch_records(self, query: ResourceQuery) -> List[Dict[str, Any]]:
        """Return the raw record objects stored for ``query``, newest first."""

        url = self.build_url(query)
        try:
            response = self._session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            logger.warning("No fue posible contactar el servicio de consulta %s: %s", url, exc)
            raise LookupClientError(f"No fue posible contactar el servicio de consulta para {query.path}.") from exc

        try:
            body = self._read_capped(response)
        finally:
            response.close()

        if not response.ok:
            detail = body.decode("utf-8", "replace").strip()
            raise LookupClientError(
                f"El servicio de consulta respondió con código {response.status_code}"
                + (f": {detail}" if detail else ".")
            )

        try:
            data = json.loads(body.decode("utf-8") or "[]")
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            raise LookupClientError("La respuesta del servicio de consulta no es un JSON válido.") from exc

        if not isinstance(data, list):
            raise LookupClientError("La respuesta del servicio de consulta no es una lista de recursos.")
        records: List[Dict[str, Any]] = []
        for item in data:
            if not isinstance(item, Mapping):
                raise LookupClientError("La respuesta contiene un recurso con formato desconocido.")
            records.append(dict(item))
        logger.debug("Consulta %s devolvió %d registros", query.path, len(records))
        return records

    def _read_capped(self, response: requests.Response) -> bytes:
        """Read the body refusing anything larger than the configured cap."""

        chunks: List[bytes] = []
        total = 0
        try:
            for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                if not chunk:
                    continue
                total += len(chunk)
                if total > self._max_bytes:
                    raise LookupClientError(
                        f"La respuesta supera el límite de {self._max_bytes} bytes permitido."
                    )
                chunks.append(chunk)
        except requests.RequestException as exc:
            raise LookupClientError("Se interrumpió la lectura de la respuesta del servicio de consulta.") from exc
        return b"".join(chunks)


__all__ = ["ResourceLookupClient", "LookupClientError"]
