"""Tag set logic backing the ``multiple-select`` control.

A :class:`TagSet` is the ordered list of tags shown in a tag-style input.
Every mutation reports itself through ``on_change`` with one of the
actions ``added``, ``popped``, ``moved`` or ``reset``; the renderer uses
that hook to write the full list back to the preference store.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

TagChangeHandler = Callable[["TagSet", str, "Tag | None"], None]


@dataclass(frozen=True)
class Tag:
    """A single tag.

    ``plain`` tags were seeded from (or typed as) bare strings and serialize
    back to the label alone; the rest serialize as ``{label, value}`` objects.
    ``verbatim`` tags were read from any other JSON entry and serialize back
    to that entry unchanged.
    """

    label: str
    value: Any
    plain: bool = False
    kind: str | None = None
    verbatim: bool = False

    def to_json(self) -> Any:
        if self.verbatim:
            return self.value
        if self.plain:
            return self.label
        data: dict[str, Any] = {"label": self.label, "value": self.value}
        if self.kind is not None:
            data["type"] = self.kind
        return data


def parse_stored_tags(raw: str | None) -> list[Any]:
    """Decode a stored tag list, falling back to ``[]`` on any corruption.

    Examples:
        >>> parse_stored_tags('["a", "b"]')
        ['a', 'b']
        >>> parse_stored_tags("not json")
        []
        >>> parse_stored_tags('{"a": 1}')
        []
    """
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("Stored tag list is not JSON: %r", raw)
        return []
    if not isinstance(data, list):
        logger.debug("Stored tag list is not an array: %r", raw)
        return []
    return data


def tags_from_json(items: Iterable[Any]) -> list[Tag]:
    """Build tags from decoded JSON; strings take their position as value.

    Entries that are neither strings nor labelled objects are kept verbatim,
    labelled with their JSON text.
    """
    tags: list[Tag] = []
    for i, item in enumerate(items):
        if isinstance(item, str):
            tags.append(Tag(label=item, value=i, plain=True))
        elif isinstance(item, Mapping) and "label" in item:
            tags.append(
                Tag(
                    label=str(item["label"]),
                    value=item.get("value", i),
                    kind=item.get("type"),
                )
            )
        else:
            tags.append(Tag(label=_json_text(item), value=item, verbatim=True))
    return tags


class TagSet:
    """Ordered, mutable tag list with an autocomplete source.

    Parameters:
        tags: Initial tags.
        source: Autocomplete entries as ``(value, label)`` pairs, in order, or a
            mapping of value to label.
        allow_new_tags: Accept labels that are not in *source*.
        case_sensitive: Compare labels case-sensitively.
        sortable: Permit :meth:`move`.
        on_change: Called after every mutation as ``(tag_set, action, tag)``.
    """

    def __init__(
        self,
        tags: Iterable[Tag] = (),
        *,
        source: Mapping[Any, str] | Iterable[tuple[Any, str]] | None = None,
        allow_new_tags: bool = False,
        case_sensitive: bool = True,
        sortable: bool = True,
        on_change: TagChangeHandler | None = None,
    ) -> None:
        self._tags: list[Tag] = list(tags)
        if isinstance(source, Mapping):
            source = source.items()
        self._source: list[tuple[Any, str]] = list(source or ())
        self.allow_new_tags = allow_new_tags
        self.case_sensitive = case_sensitive
        self.sortable = sortable
        self.on_change = on_change

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def tags(self) -> tuple[Tag, ...]:
        return tuple(self._tags)

    @property
    def labels(self) -> list[str]:
        return [t.label for t in self._tags]

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self._index_of(label) is not None

    def to_json(self) -> list[Any]:
        return [t.to_json() for t in self._tags]

    def dumps(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":"))

    def suggest(self, prefix: str) -> list[str]:
        """Return source labels starting with *prefix*, minus those already tagged."""
        needle = self._fold(prefix)
        return [
            label
            for _value, label in self._source
            if self._fold(label).startswith(needle) and label not in self
        ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, label: str) -> Tag | None:
        """Append a tag by label. Returns ``None`` if it was rejected.

        Labels found in the autocomplete source become ``{label, value}``
        tags; other labels are accepted as plain tags only when
        ``allow_new_tags`` is set. Duplicates are rejected.
        """
        label = label.strip()
        if not label or label in self:
            return None

        tag: Tag | None = None
        for value, source_label in self._source:
            if self._fold(source_label) == self._fold(label):
                tag = Tag(label=source_label, value=value)
                break
        if tag is None:
            if not self.allow_new_tags:
                logger.debug("Rejected tag %r: not in source and new tags disabled", label)
                return None
            tag = Tag(label=label, value=label, plain=True)

        self._tags.append(tag)
        self._changed("added", tag)
        return tag

    def remove(self, label: str) -> bool:
        """Remove the tag with *label*; returns whether anything was removed."""
        index = self._index_of(label)
        if index is None:
            return False
        tag = self._tags.pop(index)
        self._changed("popped", tag)
        return True

    def pop(self) -> Tag | None:
        """Remove the last tag, as backspace does in an empty tag input."""
        if not self._tags:
            return None
        tag = self._tags.pop()
        self._changed("popped", tag)
        return tag

    def move(self, old_index: int, new_index: int) -> None:
        """Move the tag at *old_index* to *new_index*; both must be in range."""
        if not self.sortable:
            msg = "Tag set is not sortable"
            raise ValueError(msg)
        size = len(self._tags)
        if not (0 <= old_index < size and 0 <= new_index < size):
            msg = f"Cannot move tag {old_index} to {new_index} in a set of {size}"
            raise ValueError(msg)
        tag = self._tags.pop(old_index)
        self._tags.insert(new_index, tag)
        self._changed("moved", tag)

    def fill(self, items: Sequence[Any]) -> None:
        """Replace every tag with tags built from decoded JSON *items*."""
        self._tags = tags_from_json(items)
        self._changed("reset", None)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fold(self, label: str) -> str:
        return label if self.case_sensitive else label.casefold()

    def _index_of(self, label: str) -> int | None:
        folded = self._fold(label)
        for i, tag in enumerate(self._tags):
            if self._fold(tag.label) == folded:
                return i
        return None

    def _changed(self, action: str, tag: Tag | None) -> None:
        if self.on_change is not None:
            self.on_change(self, action, tag)


def _json_text(item: Any) -> str:
    return json.dumps(item, separators=(",", ":"))
