"""Three-way reconciliation of catalog values with sheet records.

This module provides the Reconciler class, which decides the rows a push
writes to the sheet. Each sheet row holds a key, the baseline value last
pushed (Original Value) and an optional human edit (Updated Value). A
push must keep pending edits for keys whose catalog value has not moved.
"""

import logging
from typing import Dict, List, Mapping

from src.catalog.models import DiffPolicy

from .models import ChangeStats, ReconcileResult, SheetRecord, SheetRow, SyncMode
from .sheet_layout import SheetLayout

logger = logging.getLogger(__name__)


class Reconciler:
    """Builds sheet rows from a catalog snapshot and the existing sheet records.

    Rows always follow snapshot order. Keys that exist only in the sheet
    are counted as removed and not written back.

    Example:
        >>> reconciler = Reconciler(SheetLayout(), DiffPolicy.BASELINE_OR_UPDATED)
        >>> result = reconciler.diff_rows(
        ...     {"auth.failed": "Bad creds"},
        ...     {"auth.failed": SheetRecord("Bad creds", "Nope, try again")},
        ... )
        >>> result.rows[1]
        SheetRow(key='auth.failed', original='Bad creds', updated='Nope, try again')
    """

    def __init__(
        self,
        layout: SheetLayout,
        policy: DiffPolicy = DiffPolicy.BASELINE_OR_UPDATED,
    ):
        self.layout = layout
        self.policy = policy

    def _start_rows(self) -> List[SheetRow]:
        return [self.layout.header()] if self.layout.has_header else []

    def initial_rows(self, snapshot: Mapping[str, str]) -> ReconcileResult:
        """Rows for a first push: every key with its value as baseline and no edit.

        Args:
            snapshot: Flat catalog (dotted key -> value)

        Returns:
            ReconcileResult in INITIAL mode
        """
        rows = self._start_rows()
        rows.extend(SheetRow(key, value, "") for key, value in snapshot.items())

        logger.info(f"Initial push: {len(snapshot)} key(s)")
        return ReconcileResult(
            rows=rows,
            stats=ChangeStats(new=len(snapshot)),
            mode=SyncMode.INITIAL,
        )

    def _is_unchanged(self, value: str, record: SheetRecord) -> bool:
        if value == record.original:
            return True
        if self.policy == DiffPolicy.BASELINE_OR_UPDATED:
            return value == record.updated
        return False

    def diff_rows(
        self,
        snapshot: Mapping[str, str],
        records: Dict[str, SheetRecord],
    ) -> ReconcileResult:
        """Rows for a push against a sheet that already holds records.

        - key not in the sheet: ``(key, value, "")``, counted as new
        - value unchanged under the policy: the sheet row is kept as is
        - value changed: ``(key, original, value)``; a pending edit is overwritten

        Args:
            snapshot: Flat catalog (dotted key -> value)
            records: Existing sheet records keyed by translation key

        Returns:
            ReconcileResult in DIFF mode
        """
        rows = self._start_rows()
        stats = ChangeStats()

        for key, value in snapshot.items():
            record = records.get(key)
            if record is None:
                rows.append(SheetRow(key, value, ""))
                stats.new += 1
            elif self._is_unchanged(value, record):
                rows.append(SheetRow(key, record.original, record.updated))
                stats.unchanged += 1
            else:
                rows.append(SheetRow(key, record.original, value))
                stats.changed += 1
                logger.debug(f"Changed: {key}")

        removed_keys = [key for key in records if key not in snapshot]
        stats.removed = len(removed_keys)

        logger.info(
            f"Diff push: {stats.new} new, {stats.changed} changed, "
            f"{stats.unchanged} unchanged, {stats.removed} removed"
        )
        return ReconcileResult(
            rows=rows,
            stats=stats,
            mode=SyncMode.DIFF,
            removed_keys=removed_keys,
        )
