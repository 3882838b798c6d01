# SPDX-License-Identifier: GPL-3.0-or-later

import json
import os
import sqlite3
from typing import Any, Callable, Generic, TypeVar

from gi.repository import GLib

from desnote.exceptions import StorageError
from desnote.log import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class NoteStore:
    """Durable key -> JSON value table.

    Every key is an independent row, so a corrupt value under one key
    never affects the others.
    """

    def __init__(self, db_path=None):
        if db_path is None:
            data_dir = os.path.join(GLib.get_user_data_dir(), 'desnote')
            os.makedirs(data_dir, exist_ok=True)
            db_path = os.path.join(data_dir, 'desnote.db')

        self.db_path = db_path
        self._db = sqlite3.connect(db_path)
        self._db.execute('PRAGMA journal_mode=WAL')
        self._create_tables()

    def _create_tables(self):
        self._db.executescript('''
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        ''')

    def load(self, key: str, default: Any) -> Any:
        """Return the stored value for key, or default if missing or unreadable."""
        try:
            row = self._db.execute(
                'SELECT value FROM kv WHERE key = ?', (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning('Store read failed, using default', key=key, error=str(e))
            return default
        if row is None:
            return default
        try:
            return json.loads(row[0])
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning('Corrupt stored value, using default', key=key, error=str(e))
            return default

    def save(self, key: str, value: Any) -> None:
        """Serialize value as JSON and write it under key.

        Raises:
            StorageError: If the value cannot be serialized or written
        """
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f'Cannot serialize value for {key!r}: {e}') from e
        try:
            self._db.execute(
                'INSERT INTO kv (key, value) VALUES (?, ?) '
                'ON CONFLICT(key) DO UPDATE SET value = excluded.value',
                (key, payload),
            )
            self._db.commit()
        except sqlite3.Error as e:
            raise StorageError(f'Cannot write {key!r}: {e}') from e

    def keys(self) -> list[str]:
        rows = self._db.execute('SELECT key FROM kv ORDER BY key').fetchall()
        return [r[0] for r in rows]

    def close(self):
        self._db.close()


_MISSING = object()


class StoredValue(Generic[T]):
    """A named value backed by one key of a NoteStore.

    init() loads once, get() reads the in-memory copy, set() replaces it and
    writes through. A failed write is logged and the in-memory value stays
    authoritative until the next successful save.
    """

    def __init__(
        self,
        store: NoteStore,
        key: str,
        decode: Callable[[Any], T] | None = None,
        encode: Callable[[T], Any] | None = None,
    ):
        self._store = store
        self.key = key
        self._decode = decode
        self._encode = encode
        self._value: T | None = None
        self._loaded = False

    def init(self, default: T) -> T:
        raw = self._store.load(self.key, _MISSING)
        if raw is _MISSING:
            value = default
        elif self._decode is None:
            value = raw
        else:
            try:
                value = self._decode(raw)
            except (ValueError, TypeError) as e:
                logger.error('Stored value failed validation, using default',
                             key=self.key, kept_as=self.unreadable_key, error=str(e))
                self._keep_unreadable(raw)
                value = default
        self._value = value
        self._loaded = True
        return value

    @property
    def unreadable_key(self) -> str:
        """Row holding the last raw value that failed to decode."""
        return f'{self.key}-unreadable'

    def _keep_unreadable(self, raw) -> None:
        # The next set() overwrites self.key, so copy the raw value aside first
        try:
            self._store.save(self.unreadable_key, raw)
        except StorageError as e:
            logger.error('Could not keep unreadable value', key=self.key, error=e.message)

    def get(self) -> T:
        if not self._loaded:
            raise RuntimeError(f'StoredValue {self.key!r} used before init()')
        return self._value

    def set(self, value: T) -> bool:
        """Replace the value and write it through. Returns False if the write failed."""
        self._value = value
        self._loaded = True
        return self.flush()

    def flush(self) -> bool:
        value = self._value if self._encode is None else self._encode(self._value)
        try:
            self._store.save(self.key, value)
        except StorageError as e:
            logger.error('Persist failed, keeping in-memory state', key=self.key, error=e.message)
            return False
        return True

    def stage(self, value: T) -> None:
        """Replace the in-memory value without writing it; flush() persists it later."""
        self._value = value
        self._loaded = True
