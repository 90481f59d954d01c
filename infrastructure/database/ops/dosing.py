from __future__ import annotations

import contextlib
import sqlite3

from planterbox.utils.time import iso_now


class DosingOperations:
    """Busy-window persistence for the dosing lockout.

    Unlike most handler mixins these methods let ``sqlite3.Error`` propagate:
    a dosing decision must never be made on a store that could not be read.
    """

    def get_busy_until(self, scope_id: str) -> int | None:
        db = self.get_db()
        row = db.execute(
            "SELECT until_ms FROM DosingBusyWindow WHERE scope_id = ?",
            (scope_id,),
        ).fetchone()
        if row is None or row["until_ms"] is None:
            return None
        return int(row["until_ms"])

    def reserve_busy_window(self, scope_id: str, until_ms: int, now_ms: int) -> bool:
        """Set the window to ``until_ms`` only if it is absent or expired at ``now_ms``.

        Single conditional upsert inside ``BEGIN IMMEDIATE``; the write lock is
        taken before the existing deadline is compared, so two connections can
        never both see an expired window and both win.
        """
        db = self.get_db()
        if db.in_transaction:
            db.commit()
        try:
            cur = db.cursor()
            cur.execute("BEGIN IMMEDIATE")
            cur.execute(
                """
                INSERT INTO DosingBusyWindow (scope_id, until_ms, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(scope_id) DO UPDATE SET
                    until_ms = excluded.until_ms,
                    updated_at = excluded.updated_at
                WHERE DosingBusyWindow.until_ms <= ?
                """,
                (scope_id, int(until_ms), iso_now(), int(now_ms)),
            )
            acquired = cur.rowcount == 1
            db.commit()
            return acquired
        except sqlite3.Error:
            with contextlib.suppress(sqlite3.Error):
                db.rollback()
            raise
