"""Snapshot and ChangeEntry: the inputs and outputs of the diff engine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from changetrack.domain.enums import ActionType, ChangeSlug

Scalar = str | int | float | bool


@dataclass(frozen=True)
class Snapshot:
    """Flat, ordered, human-labelled view of one entity's current values.

    `fields` keeps the order the provider declared labels in; that order is
    the order change entries appear in. `flags` carries booleans that are
    never diffed as values (e.g. "a document was replaced"). `id` is set for
    members of a collection snapshot.
    """

    fields: dict[str, Scalar]
    reference_name: str = ""
    id: str | None = None
    flags: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for label, value in self.fields.items():
            if value is None:
                raise ValueError(f"Snapshot field '{label}' is None; render it as '-' or ''")

    def __getitem__(self, label: str) -> Scalar:
        return self.fields[label]

    def __contains__(self, label: object) -> bool:
        return label in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def get(self, label: str, default: Any = None) -> Any:
        return self.fields.get(label, default)

    def with_fields(self, **changes: Scalar) -> Snapshot:
        """Copy with some labels replaced (test and fixture helper)."""
        return Snapshot(
            fields={**self.fields, **changes},
            reference_name=self.reference_name,
            id=self.id,
            flags=dict(self.flags),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.id is not None:
            out["id"] = self.id
        out["reference_name"] = self.reference_name
        out.update(self.fields)
        out.update(self.flags)
        return out


CollectionSnapshot = list[Snapshot]


@dataclass(frozen=True)
class ChangeEntry:
    """One line of a structured audit log.

    Updates carry old_value/new_value; whole-record creates and deletes carry
    value. slug marks document entries.
    """

    label_name: str
    action_type: ActionType
    old_value: Scalar | None = None
    new_value: Scalar | None = None
    value: Scalar | None = None
    action_by: str | None = None
    reference_name: str | None = None
    slug: ChangeSlug | None = None
    referrable_type_id: str | None = None

    @property
    def is_document(self) -> bool:
        return self.slug is ChangeSlug.DOCUMENT

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; keys that do not apply to the action are omitted.

        Document updates name the replaced artifact only, so they carry no
        old/new values. No key is ever written with a null value.
        """
        out: dict[str, Any] = {"label_name": self.label_name}
        if self.action_type is ActionType.UPDATED:
            if not self.is_document:
                out["old_value"] = self.old_value if self.old_value is not None else ""
                out["new_value"] = self.new_value if self.new_value is not None else ""
        elif self.value is not None:
            out["value"] = self.value
        out["action_type"] = int(self.action_type)
        if self.action_by is not None:
            out["action_by"] = self.action_by
        if self.reference_name is not None:
            out["reference_name"] = self.reference_name
        if self.slug is not None:
            out["slug"] = self.slug.value
        if self.referrable_type_id is not None:
            out["referrable_type_id"] = self.referrable_type_id
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChangeEntry:
        """Rebuild from a stored change_log element (unknown keys ignored)."""
        slug = data.get("slug")
        return cls(
            label_name=str(data.get("label_name") or ""),
            action_type=ActionType(int(data["action_type"])),
            old_value=data.get("old_value"),
            new_value=data.get("new_value"),
            value=data.get("value"),
            action_by=data.get("action_by"),
            reference_name=data.get("reference_name"),
            slug=ChangeSlug(slug) if slug else None,
            referrable_type_id=data.get("referrable_type_id"),
        )
