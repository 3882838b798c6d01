"""
Shared test fixtures.

Stores live on tmp_path; nothing touches the user data directory.
"""

import logging

import pytest
import structlog
from gi.repository import GLib

from desnote.application import Application
from desnote.note import Folder, Note
from desnote.note_store import NoteStore


def make_note(id, **fields) -> Note:
    fields.setdefault('created_at', fields.get('updated_at', 0))
    return Note(id=id, **fields)


def make_folder(id, **fields) -> Folder:
    return Folder(id=id, **fields)


@pytest.fixture
def store(tmp_path):
    """Fresh key/value store in a temporary file."""
    s = NoteStore(str(tmp_path / 'desnote.db'))
    yield s
    s.close()


@pytest.fixture
def app(store):
    """Application over a temporary store with a short autosave window."""
    application = Application(store, autosave_delay_ms=30)
    yield application
    application.shutdown()


@pytest.fixture
def spin():
    """Run the GLib main loop for the given number of milliseconds."""
    def run(ms):
        loop = GLib.MainLoop()
        GLib.timeout_add(ms, loop.quit)
        loop.run()
    return run


@pytest.fixture
def restore_logging():
    """Undo setup_logging() changes to the root logger and structlog."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
