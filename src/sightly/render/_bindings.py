"""Case-insensitive variable scope used by render units."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping


def fold_key(key: object) -> str:
    """Return the canonical case-folded form of a scope key.

    Raises:
        TypeError: If the key is not a string.
    """
    if not isinstance(key, str):
        msg = f"binding keys must be strings, not {type(key).__name__}"
        raise TypeError(msg)
    return key.casefold()


class CaseInsensitiveBindings(MutableMapping[str, object]):
    """String-keyed mapping that compares keys case-insensitively.

    Values are stored under the literal key they were last written with,
    while iteration (and therefore ``keys()`` and ``items()``) yields the
    case-folded keys::

        scope = CaseInsensitiveBindings({"Title": "Home"})
        scope["TITLE"]                  # "Home"
        list(scope)                     # ["title"]
        scope.original_key("title")     # "Title"
        scope["TiTle"] = "About"        # replaces the entry, new casing
        scope.original_key("title")     # "TiTle"

    The source mapping is copied, never written through.
    """

    __slots__ = ("_data", "_keys")

    def __init__(self, source: Mapping[str, object] | None = None) -> None:
        self._data: dict[str, object] = {}
        self._keys: dict[str, str] = {}
        if isinstance(source, CaseInsensitiveBindings):
            source = source._data
        if source:
            self.update(source)

    def __getitem__(self, key: str) -> object:
        original = self._keys.get(fold_key(key))
        if original is None:
            raise KeyError(key)
        return self._data[original]

    def __setitem__(self, key: str, value: object) -> None:
        folded = fold_key(key)
        previous = self._keys.get(folded)
        if previous is not None and previous != key:
            del self._data[previous]
        self._keys[folded] = key
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        original = self._keys.pop(fold_key(key), None)
        if original is None:
            raise KeyError(key)
        del self._data[original]

    def __contains__(self, key: object) -> bool:
        return fold_key(key) in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        self._data.clear()
        self._keys.clear()

    def original_key(self, key: str) -> str | None:
        """Return the literal casing the entry for ``key`` is stored under."""
        return self._keys.get(fold_key(key))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"
