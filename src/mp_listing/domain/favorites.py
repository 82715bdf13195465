"""Session favorites — insertion-ordered set of listing ids."""

from collections.abc import Iterable, Iterator


class FavoritesSet:
    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: dict[str, None] = dict.fromkeys(ids)

    def __contains__(self, listing_id: object) -> bool:
        return listing_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def toggle(self, listing_id: str) -> bool:
        """Flip membership; returns True if the id is now a favorite."""
        if listing_id in self._ids:
            del self._ids[listing_id]
            return False
        self._ids[listing_id] = None
        return True

    def discard(self, listing_id: str) -> None:
        self._ids.pop(listing_id, None)

    def replace(self, ids: Iterable[str]) -> None:
        self._ids = dict.fromkeys(ids)

    def ids(self) -> list[str]:
        return list(self._ids)
