"""Hotel handle combining an index row with its lazily fetched documents."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from hotelread.errors import RemoteDataReadError
from hotelread.index.pointers import DocumentFetcher
from hotelread.models import HotelRow, Resolved, StoragePointer, Unresolved
from hotelread.projection.mapping import POINTER_GROUPS
from hotelread.utils.text import split_path


class HotelRecord:
    """One hotel as listed by the index.

    Index attributes are a snapshot taken when the record was listed.
    Documents are only fetched by :meth:`to_plain_object`.
    """

    def __init__(self, row: HotelRow, fetcher: DocumentFetcher) -> None:
        self._row = row
        self._fetcher = fetcher

    def __repr__(self) -> str:
        return f"HotelRecord(address={self.address!r})"

    @property
    def address(self) -> str:
        return self._row.address

    @property
    def manager(self) -> str | None:
        return self._row.manager

    @property
    def data_uri(self) -> str:
        if not self._row.data_uri:
            raise RemoteDataReadError(f"Index entry of {self.address} has no data URI")
        return self._row.data_uri

    def get_attribute(self, name: str) -> Any | None:
        """Read an index attribute by its internal name."""
        if name == "manager":
            return self.manager
        if name == "dataUri":
            return self.data_uri
        return None

    def to_plain_object(self, paths: Sequence[str] = ()) -> Dict[str, Any]:
        """Materialize the document groups the given paths start with.

        The data document is always fetched. Pointer groups that no path
        reaches into stay :class:`Unresolved`.
        """
        wanted = {split_path(path)[0] for path in paths}
        data_uri = self.data_uri
        document = dict(self._fetcher.fetch(data_uri))
        for group in POINTER_GROUPS:
            ref = document.get(group)
            if isinstance(ref, str):
                document[group] = self._pointer(ref, group in wanted)
        return {
            "address": self.address,
            "manager": self.manager,
            "dataUri": Resolved(ref=data_uri, contents=document),
        }

    def _pointer(self, ref: str, resolve: bool) -> StoragePointer:
        if not resolve:
            return Unresolved(ref=ref)
        return Resolved(ref=ref, contents=self._fetcher.fetch(ref))
