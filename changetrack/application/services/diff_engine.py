"""Field-level diff of entity snapshots into ordered change entries.

Pure functions: no I/O, no shared state. Entry order follows the order the
snapshot provider declared its labels in, so logs are reproducible.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from changetrack.application.dtos.change_log import ChangeEntry, Scalar, Snapshot
from changetrack.application.services.snapshots import EMPTY
from changetrack.domain.enums import ActionType, ChangeSlug
from changetrack.domain.exceptions import DiffSerializationError

# Keys that identify or annotate a record rather than describe it.
IGNORED_KEYS = frozenset({"id", "reference_name", "employee_id", "document_name"})

# Collection-member flags that synthesize one entry naming the replaced artifact.
DOCUMENT_FLAG_RULES: tuple[tuple[str, str], ...] = (
    ("void_cheque_document_modified", "Void Cheque Document"),
    ("deposit_form_document_modified", "W-4 Form Document"),
)
DOCUMENT_FLAG_KEYS = frozenset(flag for flag, _ in DOCUMENT_FLAG_RULES)

DEFAULT_COLLECTION_LABEL = "Bank Name"


def values_differ(old: Scalar | None, new: Scalar | None) -> bool:
    """Strict inequality: values of different types always differ (1 vs "1", True vs 1)."""
    if type(old) is not type(new):
        return True
    return old != new


def _is_ignored(label: str) -> bool:
    return label in IGNORED_KEYS or label in DOCUMENT_FLAG_KEYS


def diff_snapshots(
    before: Snapshot | None,
    after: Snapshot,
    action_by: str | None = None,
    referrable_type_id: str | None = None,
) -> list[ChangeEntry]:
    """Diff two snapshots of the same record.

    With no before snapshot every present after field becomes a Created entry
    carrying `value`; otherwise each changed field becomes an Updated entry.
    A label missing on one side counts as "-" there, so no entry ever
    carries a null value. Identical snapshots produce an empty list.
    """
    if before is None:
        return [
            ChangeEntry(
                label_name=label,
                action_type=ActionType.CREATED,
                value=after[label],
                action_by=action_by,
                reference_name=after.reference_name,
                referrable_type_id=referrable_type_id,
            )
            for label in after
            if not _is_ignored(label)
        ]

    reference_name = before.reference_name or ""
    # Labels present on one side only diff against "-"; dropped labels follow in before order.
    labels = list(after) + [label for label in before if label not in after]
    entries: list[ChangeEntry] = []
    for label in labels:
        if _is_ignored(label):
            continue
        old = before.get(label, EMPTY)
        new = after.get(label, EMPTY)
        if values_differ(old, new):
            entries.append(
                ChangeEntry(
                    label_name=label,
                    action_type=ActionType.UPDATED,
                    old_value=old,
                    new_value=new,
                    action_by=action_by,
                    reference_name=reference_name,
                    referrable_type_id=referrable_type_id,
                )
            )
    return entries


def _document_flag_entries(
    before: Snapshot, after: Snapshot, action_by: str | None
) -> list[ChangeEntry]:
    entries = []
    for flag, artifact in DOCUMENT_FLAG_RULES:
        if after.flags.get(flag) is True:
            entries.append(
                ChangeEntry(
                    label_name=artifact,
                    action_type=ActionType.UPDATED,
                    action_by=action_by,
                    reference_name=before.reference_name or "",
                    slug=ChangeSlug.DOCUMENT,
                    referrable_type_id=after.id,
                )
            )
    return entries


def diff_collections(
    before: Sequence[Snapshot],
    after: Sequence[Snapshot],
    action_by: str | None = None,
    label: str = DEFAULT_COLLECTION_LABEL,
) -> list[ChangeEntry]:
    """Reconcile two collections by member id.

    Deleted members come first (in before order), then added and modified
    members in after order. A matched pair contributes its scalar diff plus
    one entry per raised document flag.
    """
    after_ids = {member.id for member in after}
    before_by_id = {member.id: member for member in before}

    entries: list[ChangeEntry] = []
    for removed in before:
        if removed.id not in after_ids:
            entries.append(
                record_value_entry(
                    label,
                    removed.reference_name,
                    ActionType.DELETED,
                    action_by=action_by,
                    referrable_type_id=removed.id,
                )
            )

    for current in after:
        previous = before_by_id.get(current.id)
        if previous is None:
            entries.append(
                record_value_entry(
                    label,
                    current.reference_name,
                    ActionType.CREATED,
                    action_by=action_by,
                    referrable_type_id=current.id,
                )
            )
            continue
        entries.extend(
            diff_snapshots(previous, current, action_by=action_by, referrable_type_id=current.id)
        )
        entries.extend(_document_flag_entries(previous, current, action_by))
    return entries


def record_value_entry(
    label: str,
    value: Scalar,
    action_type: ActionType,
    action_by: str | None = None,
    reference_name: str | None = None,
    referrable_type_id: str | None = None,
) -> ChangeEntry:
    """Entry for a whole-record create or delete (e.g. "Bank Name": "Chase")."""
    if action_type is ActionType.UPDATED:
        raise ValueError("record_value_entry is for Created or Deleted entries")
    return ChangeEntry(
        label_name=label,
        action_type=action_type,
        value=value if value is not None else "",
        action_by=action_by,
        reference_name=reference_name,
        referrable_type_id=referrable_type_id,
    )


def document_entry(
    label: str,
    value: Scalar,
    action_type: ActionType,
    action_by: str | None = None,
    reference_name: str | None = None,
    referrable_type_id: str | None = None,
) -> ChangeEntry:
    """Entry for a document added to or removed from a record."""
    return ChangeEntry(
        label_name=label,
        action_type=action_type,
        value=value,
        action_by=action_by,
        reference_name=reference_name,
        slug=ChangeSlug.DOCUMENT,
        referrable_type_id=referrable_type_id,
    )


def serialize_change_log(entries: Iterable[ChangeEntry]) -> str:
    """Serialize entries to a JSON array, preserving order.

    Raises:
        DiffSerializationError: when an entry holds a non-JSON value.
    """
    try:
        return json.dumps([entry.to_dict() for entry in entries], allow_nan=False)
    except (TypeError, ValueError) as e:
        raise DiffSerializationError(str(e)) from e
