# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Optional

from gi.repository import GObject

from desnote import exchange, lifecycle, selection as batch
from desnote.auto_save import AutoSave
from desnote.constants import AUTOSAVE_DELAY_MS, FOLDERS_KEY, NOTES_KEY, SEED_FOLDERS
from desnote.exceptions import ImportValidationError
from desnote.log import get_logger
from desnote.note import EntityKind, Folder, Note
from desnote.note_store import NoteStore, StoredValue
from desnote.preferences import Preferences
from desnote.schemas import folders_from_json, folders_to_json, notes_from_json, notes_to_json
from desnote.selection import Selection
from desnote.view import Layout, Tab, View, compute_view, layout

logger = get_logger(__name__)


class Application(GObject.Object):
    """Composition root: owns the stores, the selection and the view state.

    Every mutation goes through the pure lifecycle/batch functions, then the
    touched collection is written back and a change signal is emitted.
    """

    __gtype_name__ = 'DesnoteApplication'

    __gsignals__ = {
        'notes-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
        'folders-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
        'selection-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
        'delete-requested': (GObject.SignalFlags.RUN_LAST, None, (str, str)),
        'import-failed': (GObject.SignalFlags.RUN_LAST, None, (str,)),
    }

    def __init__(self, store: Optional[NoteStore] = None, autosave_delay_ms=AUTOSAVE_DELAY_MS, **kwargs):
        super().__init__(**kwargs)
        self.store = store if store is not None else NoteStore()

        self._notes = StoredValue(self.store, NOTES_KEY, decode=notes_from_json, encode=notes_to_json)
        self._folders = StoredValue(self.store, FOLDERS_KEY, decode=folders_from_json, encode=folders_to_json)
        self._notes.init(())
        self._folders.init(folders_from_json(SEED_FOLDERS))

        self.preferences = Preferences(self.store)
        self.selection = Selection()
        self.active_tab = Tab.ALL
        self.search_query = ''

        self._pending_delete: Optional[tuple[EntityKind, str]] = None
        self._auto_save = AutoSave(self._notes.flush, autosave_delay_ms)

    @property
    def notes(self) -> tuple[Note, ...]:
        return self._notes.get()

    @property
    def folders(self) -> tuple[Folder, ...]:
        return self._folders.get()

    @property
    def in_trash(self) -> bool:
        return self.active_tab == Tab.TRASH

    @property
    def pending_delete(self) -> Optional[tuple[EntityKind, str]]:
        return self._pending_delete

    def _commit(self, notes=None, folders=None):
        if notes is not None:
            # A full write supersedes any debounced edit still waiting
            self._auto_save.cancel()
            self._notes.set(notes)
            self.emit('notes-changed')
        if folders is not None:
            self._folders.set(folders)
            self.emit('folders-changed')

    # --- Notes and folders ---

    def create_note(self, folder_id: Optional[str] = None) -> Note:
        note, notes = lifecycle.create_note(self.notes, folder_id)
        self._commit(notes=notes)
        return note

    def create_folder(self) -> Folder:
        folder, folders = lifecycle.create_folder(self.folders)
        self._commit(folders=folders)
        return folder

    def update_note(self, note_id: str, **fields):
        """Merge fields into a note and write the notes collection.

        An unknown note_id is a no-op.

        Raises:
            TypeError: If fields names an unknown attribute or one of id,
                created_at, updated_at
        """
        self._commit(notes=lifecycle.update_note(self.notes, note_id, **fields))

    def edit_note(self, note_id: str, **fields):
        """Apply a text edit now and persist it once edits pause.

        Raises:
            TypeError: As update_note(), for unknown or managed fields
        """
        self._notes.stage(lifecycle.update_note(self.notes, note_id, **fields))
        self.emit('notes-changed')
        self._auto_save.trigger()

    def update_folder(self, folder_id: str, **fields):
        """Merge fields into a folder. Raises TypeError like update_note()."""
        self._commit(folders=lifecycle.update_folder(self.folders, folder_id, **fields))

    def move_note(self, note_id: str, folder_id: Optional[str]):
        self._commit(notes=lifecycle.move_note(self.notes, note_id, folder_id))

    # --- Delete, restore ---

    def request_delete(self, kind, entity_id: str) -> bool:
        """Delete now if confirmation is suppressed, otherwise ask first.

        Returns:
            True if the delete ran immediately
        """
        kind = EntityKind(kind)
        if self.preferences.suppress_delete_confirmation:
            self.execute_delete(kind, entity_id)
            return True
        self._pending_delete = (kind, entity_id)
        self.emit('delete-requested', kind.value, entity_id)
        return False

    def confirm_delete(self, remember: bool = False):
        if self._pending_delete is None:
            return
        kind, entity_id = self._pending_delete
        self._pending_delete = None
        if remember:
            self.preferences.suppress_delete_confirmation = True
        self.execute_delete(kind, entity_id)

    def cancel_delete(self):
        self._pending_delete = None

    def execute_delete(self, kind, entity_id: str):
        """Delete without confirmation: trash it, or remove it when viewing the trash."""
        kind = EntityKind(kind)
        if self.in_trash:
            notes, folders = lifecycle.permanent_delete(self.notes, self.folders, kind, entity_id)
            logger.info('Permanently deleted', kind=kind.value, entity_id=entity_id)
        else:
            notes, folders = lifecycle.soft_delete(self.notes, self.folders, kind, entity_id)
            logger.info('Moved to trash', kind=kind.value, entity_id=entity_id)
        self._commit(notes=notes, folders=folders if kind == EntityKind.FOLDER else None)

    def restore(self, kind, entity_id: str):
        kind = EntityKind(kind)
        notes, folders = lifecycle.restore(self.notes, self.folders, kind, entity_id)
        if kind == EntityKind.NOTE:
            self._commit(notes=notes)
        else:
            self._commit(folders=folders)

    def empty_trash(self):
        notes, folders = lifecycle.empty_trash(self.notes, self.folders)
        logger.info('Trash emptied',
                    notes=len(self.notes) - len(notes),
                    folders=len(self.folders) - len(folders))
        self._commit(notes=notes, folders=folders)

    # --- Selection ---

    def toggle_selection(self, entity_id: str):
        self.selection.toggle(entity_id)
        self.emit('selection-changed')

    def select_and_enter(self, entity_id: str):
        self.selection.select_and_enter(entity_id)
        self.emit('selection-changed')

    def select_all(self):
        """Enter selection mode with every entity of the current view selected."""
        view = self.view()
        self.selection.enter()
        self.selection.select_all(e.id for e in (*view.folders, *view.notes))
        self.emit('selection-changed')

    def exit_selection(self):
        self.selection.exit()
        self.emit('selection-changed')

    def move_selected(self, target_folder_id: Optional[str]):
        ids = self.selection.snapshot()
        if ids:
            self._commit(notes=batch.batch_move(self.notes, ids, target_folder_id))
        self.exit_selection()

    def delete_selected(self):
        ids = self.selection.snapshot()
        if ids:
            notes, folders = batch.batch_delete(self.notes, self.folders, ids, in_trash=self.in_trash)
            self._commit(notes=notes, folders=folders)
        self.exit_selection()

    def toggle_favorite_selected(self):
        ids = self.selection.snapshot()
        if ids:
            notes, folders = batch.batch_toggle_favorite(self.notes, self.folders, ids)
            self._commit(notes=notes, folders=folders)
        self.exit_selection()

    def restore_selected(self):
        ids = self.selection.snapshot()
        if ids:
            notes, folders = batch.batch_restore(self.notes, self.folders, ids)
            self._commit(notes=notes, folders=folders)
        self.exit_selection()

    # --- Views ---

    def view(self) -> View:
        return compute_view(self.notes, self.folders, self.active_tab, self.search_query)

    def layout(self) -> Layout:
        return layout(self.notes, self.folders, self.active_tab, self.search_query)

    # --- Backup ---

    def export_data(self) -> str:
        return exchange.dumps(exchange.export_envelope(self.notes, self.folders))

    def import_data(self, payload):
        """Replace all notes and folders with the backup's contents.

        Raises:
            ImportValidationError: If the payload is rejected; state is unchanged
        """
        try:
            notes, folders = exchange.parse_envelope(payload)
        except ImportValidationError as e:
            logger.warning('Import rejected', error=e.message)
            self.emit('import-failed', e.message)
            raise
        self.exit_selection()
        self._commit(notes=notes, folders=folders)

    def shutdown(self):
        self._auto_save.save_now()
        self.store.close()
