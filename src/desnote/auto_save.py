# SPDX-License-Identifier: GPL-3.0-or-later

from gi.repository import GLib

from desnote.constants import AUTOSAVE_DELAY_MS
from desnote.log import get_logger

logger = get_logger(__name__)


class AutoSave:
    """Debounced write on the GLib main loop.

    Each trigger() discards the pending write and restarts the idle window;
    exactly one write runs once triggers stop for delay_ms.
    """

    def __init__(self, save_callback, delay_ms=AUTOSAVE_DELAY_MS):
        self._save_callback = save_callback
        self._delay_ms = delay_ms
        self._timeout_id = None
        self._discarded = 0

    @property
    def pending(self) -> bool:
        return self._timeout_id is not None

    def trigger(self):
        """Schedule a save after the debounce delay. Resets if called again."""
        if self.pending:
            self._discarded += 1
        self._cancel_timeout()
        self._timeout_id = GLib.timeout_add(self._delay_ms, self._do_save)

    def cancel(self):
        """Drop the pending save without running it."""
        if self.pending:
            logger.debug('Pending save cancelled')
        self._cancel_timeout()
        self._discarded = 0

    def save_now(self):
        """Run the pending save immediately. No-op if nothing is pending."""
        if not self.pending:
            return
        self._cancel_timeout()
        self._run()

    def _cancel_timeout(self):
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
            self._timeout_id = None

    def _do_save(self):
        self._timeout_id = None
        self._run()
        return GLib.SOURCE_REMOVE

    def _run(self):
        logger.debug('Debounced save', coalesced=self._discarded + 1)
        self._discarded = 0
        self._save_callback()
