"""Field values for a single wizard instance, including repeatable entries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from uuid import uuid4

from core.errors import UnknownFieldError, UnknownSectionError
from wizard.fields import ENTRY_KEY_SEPARATOR, SectionSpec, entry_field_key, split_field_key
from wizard.types import FieldValue

logger = logging.getLogger(__name__)

EntryIdFactory = Callable[[], str]


def _default_entry_id() -> str:
    return uuid4().hex


@dataclass
class RepeatableEntry:
    """One record inside a repeatable section."""

    id: str
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def copy(self) -> "RepeatableEntry":
        return RepeatableEntry(id=self.id, fields=dict(self.fields))


class FieldStore:
    """Hold current values keyed by field name and by ``entry_id:field``.

    Every section starts with one blank entry (or the supplied initial entries)
    and can never drop below one.
    """

    def __init__(
        self,
        sections: Sequence[SectionSpec] = (),
        *,
        id_factory: EntryIdFactory | None = None,
        initial_entries: Mapping[str, Sequence[Mapping[str, FieldValue]]] | None = None,
    ) -> None:
        self._values: dict[str, FieldValue] = {}
        self._section_specs: dict[str, SectionSpec] = {section.key: section for section in sections}
        self._sections: dict[str, list[RepeatableEntry]] = {section.key: [] for section in sections}
        self._entry_sections: dict[str, str] = {}
        self._id_factory = id_factory or _default_entry_id
        seeds = initial_entries or {}
        for section_id in seeds:
            if section_id not in self._section_specs:
                raise UnknownSectionError(section_id)
        for section in sections:
            rows = list(seeds.get(section.key, ()))
            if not rows:
                self.add_entry(section.key)
                continue
            for row in rows:
                entry = self.add_entry(section.key)
                for key, value in row.items():
                    spec = section.field(key)
                    if spec is None:
                        raise UnknownFieldError(entry_field_key(entry.id, key))
                    entry.fields[key] = spec.clean(value)

    # ── plain and composite values ───────────────────────────
    def get(self, key: str, default: FieldValue = None) -> FieldValue:
        entry_id, field_key = split_field_key(key)
        if entry_id is None:
            return self._values.get(key, default)
        entry = self._entry(entry_id, key)
        return entry.fields.get(field_key, default)

    def set(self, key: str, value: FieldValue) -> None:
        """Overwrite the value stored under ``key``."""

        entry_id, field_key = split_field_key(key)
        if entry_id is None:
            self._values[key] = value
            return
        entry = self._entry(entry_id, key)
        section = self._section_specs[self._entry_sections[entry_id]]
        if section.field(field_key) is None:
            raise UnknownFieldError(key)
        entry.fields[field_key] = value

    @property
    def values(self) -> Mapping[str, FieldValue]:
        return MappingProxyType(self._values)

    def clear(self) -> None:
        self._values.clear()
        for entries in self._sections.values():
            entries.clear()
        self._entry_sections.clear()

    # ── repeatable sections ──────────────────────────────────
    def section_ids(self) -> tuple[str, ...]:
        return tuple(self._sections)

    def section_spec(self, section_id: str) -> SectionSpec:
        try:
            return self._section_specs[section_id]
        except KeyError:
            raise UnknownSectionError(section_id) from None

    def section_of(self, entry_id: str) -> str:
        try:
            return self._entry_sections[entry_id]
        except KeyError:
            raise UnknownFieldError(entry_id) from None

    def entries(self, section_id: str) -> tuple[RepeatableEntry, ...]:
        """Return copies of the entries in ``section_id``, in display order."""

        self.section_spec(section_id)
        return tuple(entry.copy() for entry in self._sections[section_id])

    def entry_scope(self, entry_id: str) -> Mapping[str, FieldValue]:
        return MappingProxyType(self._entry(entry_id, entry_id).fields)

    def add_entry(self, section_id: str) -> RepeatableEntry:
        """Append a blank entry to ``section_id`` and return it."""

        section = self.section_spec(section_id)
        entry_id = self._id_factory()
        if not entry_id or ENTRY_KEY_SEPARATOR in entry_id:
            raise ValueError(f"Entry id '{entry_id}' must be non-empty and free of '{ENTRY_KEY_SEPARATOR}'")
        if entry_id in self._entry_sections:
            raise ValueError(f"Entry id '{entry_id}' is already in use")
        entry = RepeatableEntry(id=entry_id, fields=section.blank_entry())
        self._sections[section_id].append(entry)
        self._entry_sections[entry_id] = section_id
        return entry

    def remove_entry(self, section_id: str, entry_id: str) -> bool:
        """Remove ``entry_id``; refuse when it is the last entry of the section."""

        self.section_spec(section_id)
        entries = self._sections[section_id]
        if self._entry_sections.get(entry_id) != section_id:
            raise UnknownFieldError(entry_id)
        if len(entries) <= 1:
            logger.debug("Refusing to remove the last entry of section '%s'", section_id)
            return False
        self._sections[section_id] = [entry for entry in entries if entry.id != entry_id]
        del self._entry_sections[entry_id]
        return True

    def _entry(self, entry_id: str, key: str) -> RepeatableEntry:
        section_id = self._entry_sections.get(entry_id)
        if section_id is None:
            raise UnknownFieldError(key)
        for entry in self._sections[section_id]:
            if entry.id == entry_id:
                return entry
        raise UnknownFieldError(key)  # pragma: no cover - index out of sync

    def snapshot_entries(self) -> dict[str, tuple[dict[str, FieldValue], ...]]:
        return {
            section_id: tuple(dict(entry.fields) for entry in entries)
            for section_id, entries in self._sections.items()
        }


__all__ = ["EntryIdFactory", "FieldStore", "RepeatableEntry"]
