"""Resolution of document pointers."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

import requests

from hotelread.errors import StoragePointerError
from hotelread.index.storage import JSON_SCHEME, SQLiteHotelStore

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

HEADERS = {
    "User-Agent": "hotelread/0.1",
    "Accept": "application/json",
}


class DocumentFetcher:
    """Fetch the JSON documents hotel pointers refer to.

    ``json://<key>`` pointers are read from the local store, ``http(s)://``
    pointers over HTTP. Fetched documents are cached for the lifetime of the
    fetcher, which is one request.
    """

    def __init__(
        self,
        store: SQLiteHotelStore,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.store = store
        self.timeout = timeout
        self._session = session
        self._cache: Dict[str, Dict[str, Any]] = {}

    def close(self) -> None:
        if self._session is not None:
            self._session.close()

    def fetch(self, uri: str) -> Dict[str, Any]:
        if uri in self._cache:
            return self._cache[uri]

        if uri.startswith(JSON_SCHEME):
            document = self._fetch_local(uri[len(JSON_SCHEME):])
        elif uri.startswith(("http://", "https://")):
            document = self._fetch_http(uri)
        else:
            raise StoragePointerError(f"Unsupported document pointer: {uri}")

        if not isinstance(document, dict):
            raise StoragePointerError(f"Document at {uri} is not a JSON object")
        self._cache[uri] = document
        return document

    def _fetch_local(self, key: str) -> Any:
        document = self.store.get_document(key)
        if document is None:
            raise StoragePointerError(f"Document {JSON_SCHEME}{key} does not exist")
        return document

    def _fetch_http(self, uri: str) -> Any:
        if self._session is None:
            self._session = requests.Session()
        LOGGER.debug("Fetching document %s", uri)
        try:
            response = self._session.get(uri, headers=HEADERS, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, json.JSONDecodeError) as exc:
            raise StoragePointerError(f"Cannot fetch document {uri}: {exc}") from exc
