# SPDX-License-Identifier: GPL-3.0-or-later

"""
Entity lifecycle.

Pure functions over the (notes, folders) universe. Each takes the current
collections and returns new ones; inputs are never mutated. Lookups that
miss are no-ops and return the collection unchanged.
"""

from dataclasses import replace
from typing import Optional, Sequence

from desnote.constants import DEFAULT_FOLDER_NAME
from desnote.log import get_logger
from desnote.note import EntityKind, Folder, Note, new_id, now_ms

logger = get_logger(__name__)

Notes = tuple[Note, ...]
Folders = tuple[Folder, ...]

_MANAGED_FIELDS = frozenset({'id', 'created_at', 'updated_at'})


def _check_fields(cls, fields: dict) -> None:
    unknown = set(fields) - set(cls.__dataclass_fields__)
    if unknown:
        raise TypeError(f'{cls.__name__} has no field(s): {", ".join(sorted(unknown))}')
    frozen = set(fields) & _MANAGED_FIELDS
    if frozen:
        raise TypeError(f'{cls.__name__} field(s) cannot be changed: {", ".join(sorted(frozen))}')


def create_note(
    notes: Sequence[Note],
    folder_id: Optional[str] = None,
    now: Optional[int] = None,
) -> tuple[Note, Notes]:
    """Create an empty note in folder_id (None for root), at the head."""
    ts = now_ms() if now is None else now
    note = Note(id=new_id(), folder_id=folder_id, created_at=ts, updated_at=ts)
    logger.debug('Note created', note_id=note.id, folder_id=folder_id)
    return note, (note, *notes)


def create_folder(
    folders: Sequence[Folder],
    name: str = DEFAULT_FOLDER_NAME,
) -> tuple[Folder, Folders]:
    """Create a folder, appended after the existing ones."""
    folder = Folder(id=new_id(), name=name)
    logger.debug('Folder created', folder_id=folder.id)
    return folder, (*folders, folder)


def update_note(
    notes: Sequence[Note],
    note_id: str,
    now: Optional[int] = None,
    **fields,
) -> Notes:
    """Merge fields into the note with note_id and refresh updated_at."""
    _check_fields(Note, fields)
    ts = now_ms() if now is None else now
    return tuple(
        replace(n, **fields, updated_at=ts) if n.id == note_id else n
        for n in notes
    )


def update_folder(folders: Sequence[Folder], folder_id: str, **fields) -> Folders:
    """Merge fields into the folder with folder_id. Folders carry no timestamp."""
    _check_fields(Folder, fields)
    return tuple(
        replace(f, **fields) if f.id == folder_id else f
        for f in folders
    )


def move_note(
    notes: Sequence[Note],
    note_id: str,
    folder_id: Optional[str],
    now: Optional[int] = None,
) -> Notes:
    return update_note(notes, note_id, now=now, folder_id=folder_id)


def soft_delete(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    kind: EntityKind,
    entity_id: str,
    now: Optional[int] = None,
) -> tuple[Notes, Folders]:
    """Move an entity to the trash.

    Trashing a folder first spills its notes to root (folder_id = None),
    then marks the folder deleted. The notes themselves stay live.
    """
    ts = now_ms() if now is None else now
    if kind == EntityKind.NOTE:
        next_notes = tuple(
            replace(n, is_deleted=True, updated_at=ts) if n.id == entity_id else n
            for n in notes
        )
        return next_notes, tuple(folders)

    if not any(f.id == entity_id for f in folders):
        return tuple(notes), tuple(folders)

    spilled = 0
    next_notes = []
    for n in notes:
        if n.folder_id == entity_id:
            n = replace(n, folder_id=None, updated_at=ts)
            spilled += 1
        next_notes.append(n)
    next_folders = tuple(
        replace(f, is_deleted=True) if f.id == entity_id else f
        for f in folders
    )
    logger.debug('Folder trashed', folder_id=entity_id, spilled=spilled)
    return tuple(next_notes), next_folders


def restore(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    kind: EntityKind,
    entity_id: str,
    now: Optional[int] = None,
) -> tuple[Notes, Folders]:
    """Take an entity out of the trash.

    Notes spilled when a folder was trashed are not moved back into it.
    """
    if kind == EntityKind.NOTE:
        ts = now_ms() if now is None else now
        next_notes = tuple(
            replace(n, is_deleted=False, updated_at=ts) if n.id == entity_id else n
            for n in notes
        )
        return next_notes, tuple(folders)
    next_folders = tuple(
        replace(f, is_deleted=False) if f.id == entity_id else f
        for f in folders
    )
    return tuple(notes), next_folders


def permanent_delete(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    kind: EntityKind,
    entity_id: str,
) -> tuple[Notes, Folders]:
    """Remove an entity for good. Does not cascade to notes."""
    if kind == EntityKind.NOTE:
        return tuple(n for n in notes if n.id != entity_id), tuple(folders)
    return tuple(notes), tuple(f for f in folders if f.id != entity_id)


def empty_trash(
    notes: Sequence[Note],
    folders: Sequence[Folder],
) -> tuple[Notes, Folders]:
    """Permanently remove every trashed note and folder."""
    return (
        tuple(n for n in notes if not n.is_deleted),
        tuple(f for f in folders if not f.is_deleted),
    )
