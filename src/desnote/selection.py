# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from desnote import lifecycle
from desnote.lifecycle import Folders, Notes
from desnote.log import get_logger
from desnote.note import EntityKind, Folder, Note, now_ms

logger = get_logger(__name__)


class Selection:
    """Selected entity ids, notes and folders mixed, plus the mode flag."""

    def __init__(self):
        self.active = False
        self.ids: set[str] = set()

    def __contains__(self, entity_id):
        return entity_id in self.ids

    def __len__(self):
        return len(self.ids)

    def toggle(self, entity_id: str):
        """Add or remove entity_id. Leaves the mode untouched."""
        if entity_id in self.ids:
            self.ids.discard(entity_id)
        else:
            self.ids.add(entity_id)

    def select_and_enter(self, entity_id: str):
        """Long-press: select this item and enter selection mode."""
        self.active = True
        self.ids.add(entity_id)

    def enter(self):
        self.active = True

    def exit(self):
        self.active = False
        self.ids.clear()

    def select_all(self, entity_ids: Iterable[str]):
        self.ids.update(entity_ids)

    def snapshot(self) -> frozenset[str]:
        return frozenset(self.ids)


def resolve_kind(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    entity_id: str,
) -> Optional[EntityKind]:
    """Find which collection entity_id belongs to, or None."""
    if any(n.id == entity_id for n in notes):
        return EntityKind.NOTE
    if any(f.id == entity_id for f in folders):
        return EntityKind.FOLDER
    return None


def batch_move(
    notes: Sequence[Note],
    selected_ids: Iterable[str],
    target_folder_id: Optional[str],
    now: Optional[int] = None,
) -> Notes:
    """Move every selected note into target_folder_id (None for root).

    Selected folders are skipped: folders do not nest.
    """
    ids = set(selected_ids)
    ts = now_ms() if now is None else now
    return tuple(
        replace(n, folder_id=target_folder_id, updated_at=ts) if n.id in ids else n
        for n in notes
    )


def batch_delete(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    selected_ids: Iterable[str],
    in_trash: bool = False,
    now: Optional[int] = None,
) -> tuple[Notes, Folders]:
    """Trash every selected entity, or remove it for good when in_trash."""
    next_notes, next_folders = tuple(notes), tuple(folders)
    for entity_id in selected_ids:
        kind = resolve_kind(next_notes, next_folders, entity_id)
        if kind is None:
            continue
        if in_trash:
            next_notes, next_folders = lifecycle.permanent_delete(
                next_notes, next_folders, kind, entity_id)
        else:
            next_notes, next_folders = lifecycle.soft_delete(
                next_notes, next_folders, kind, entity_id, now=now)
    return next_notes, next_folders


def batch_restore(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    selected_ids: Iterable[str],
    now: Optional[int] = None,
) -> tuple[Notes, Folders]:
    next_notes, next_folders = tuple(notes), tuple(folders)
    for entity_id in selected_ids:
        kind = resolve_kind(next_notes, next_folders, entity_id)
        if kind is not None:
            next_notes, next_folders = lifecycle.restore(
                next_notes, next_folders, kind, entity_id, now=now)
    return next_notes, next_folders


def batch_toggle_favorite(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    selected_ids: Iterable[str],
) -> tuple[Notes, Folders]:
    """Pin every selected entity unless all of them are pinned already.

    Repeated calls flip the whole group between all pinned and all
    unpinned; the result is never mixed. Ids that resolve to nothing are
    not counted.
    """
    ids = set(selected_ids)
    targets = [n for n in notes if n.id in ids] + [f for f in folders if f.id in ids]
    if not targets:
        return tuple(notes), tuple(folders)

    pinned_count = sum(1 for t in targets if t.is_pinned)
    should_pin = pinned_count < len(targets)
    logger.debug('Toggling favorites', count=len(targets), pin=should_pin)

    # Pinning leaves updated_at alone so favorites do not reorder the view
    next_notes = tuple(
        replace(n, is_pinned=should_pin) if n.id in ids else n for n in notes
    )
    next_folders = tuple(
        replace(f, is_pinned=should_pin) if f.id in ids else f for f in folders
    )
    return next_notes, next_folders
