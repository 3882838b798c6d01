# SPDX-License-Identifier: GPL-3.0-or-later

"""
View computation.

compute_view() derives the visible slice for a (tab, search query) pair.
It is a pure function of its inputs and keeps no cache.
"""

import enum
from typing import NamedTuple, Sequence

from desnote.note import Folder, Note


class Tab(str, enum.Enum):
    ALL = 'all'
    FAVORITES = 'favorites'
    FOLDERS = 'folders'
    NOTES = 'notes'
    TRASH = 'trash'


class View(NamedTuple):
    notes: tuple[Note, ...]
    folders: tuple[Folder, ...]


class Layout(NamedTuple):
    """A view split for rendering: folders with their notes, then loose notes."""
    folders: tuple[Folder, ...]
    folder_notes: dict[str, tuple[Note, ...]]
    root_notes: tuple[Note, ...]


def compute_view(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    tab: Tab = Tab.ALL,
    search_query: str = '',
) -> View:
    tab = Tab(tab)
    in_trash = tab == Tab.TRASH

    visible_notes = [n for n in notes if n.is_deleted == in_trash]
    visible_folders = [f for f in folders if f.is_deleted == in_trash]

    if tab == Tab.FAVORITES:
        visible_notes = [n for n in visible_notes if n.is_pinned]
        visible_folders = [f for f in visible_folders if f.is_pinned]
    elif tab == Tab.FOLDERS:
        visible_notes = []
    elif tab == Tab.NOTES:
        visible_folders = []

    if search_query:
        if tab == Tab.FOLDERS:
            visible_folders = [f for f in visible_folders if f.matches(search_query)]
        elif tab == Tab.NOTES:
            visible_notes = [n for n in visible_notes if n.matches(search_query)]
        else:
            # Notes and folders are narrowed independently
            visible_notes = [n for n in visible_notes if n.matches(search_query)]
            visible_folders = [f for f in visible_folders if f.matches(search_query)]

    # sorted() is stable: equal timestamps keep collection order
    visible_notes = sorted(visible_notes, key=lambda n: n.updated_at, reverse=True)

    return View(tuple(visible_notes), tuple(visible_folders))


def notes_of(notes: Sequence[Note], folder_id: str) -> tuple[Note, ...]:
    """Live notes filed under folder_id, regardless of tab or search."""
    return tuple(n for n in notes if n.folder_id == folder_id and not n.is_deleted)


def root_notes(
    view: View,
    tab: Tab = Tab.ALL,
    known_folder_ids: frozenset[str] | None = None,
) -> tuple[Note, ...]:
    """Notes rendered outside any folder.

    In the trash every visible note is shown flat. Elsewhere a note is a
    root note when it has no folder, or when its folder is not among
    known_folder_ids (a dangling reference, shown but not repaired).
    """
    if Tab(tab) == Tab.TRASH:
        return view.notes
    if known_folder_ids is None:
        return tuple(n for n in view.notes if n.folder_id is None)
    return tuple(
        n for n in view.notes
        if n.folder_id is None or n.folder_id not in known_folder_ids
    )


def layout(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    tab: Tab = Tab.ALL,
    search_query: str = '',
) -> Layout:
    view = compute_view(notes, folders, tab, search_query)
    if Tab(tab) == Tab.TRASH:
        return Layout(view.folders, {}, view.notes)

    live_folder_ids = frozenset(f.id for f in folders if not f.is_deleted)
    folder_notes = {f.id: notes_of(notes, f.id) for f in view.folders}
    return Layout(view.folders, folder_notes, root_notes(view, tab, live_folder_ids))
