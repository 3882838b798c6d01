# SPDX-License-Identifier: GPL-3.0-or-later

from gi.repository import GObject

from desnote.constants import SUPPRESS_DELETE_KEY, THEME_KEY
from desnote.note_store import NoteStore, StoredValue


def _as_bool(raw) -> bool:
    if not isinstance(raw, bool):
        raise TypeError(f'expected a boolean, got {type(raw).__name__}')
    return raw


class Preferences(GObject.Object):
    """User preferences, each persisted under its own key.

    Setting a property writes it through to the store.
    """

    __gtype_name__ = 'DesnotePreferences'

    dark_theme = GObject.Property(type=bool, default=False)
    suppress_delete_confirmation = GObject.Property(type=bool, default=False)

    def __init__(self, store: NoteStore, **kwargs):
        super().__init__(**kwargs)
        self._stored = {
            'dark-theme': StoredValue(store, THEME_KEY, decode=_as_bool),
            'suppress-delete-confirmation': StoredValue(store, SUPPRESS_DELETE_KEY, decode=_as_bool),
        }
        self.dark_theme = self._stored['dark-theme'].init(False)
        self.suppress_delete_confirmation = self._stored['suppress-delete-confirmation'].init(False)

        for name in self._stored:
            self.connect(f'notify::{name}', self._on_changed)

    def toggle_theme(self):
        self.dark_theme = not self.dark_theme

    def _on_changed(self, prefs, pspec):
        self._stored[pspec.name].set(self.get_property(pspec.name))
