"""Data models for CLI operations.

This module defines the rows, records and results passed between the
sheet reader, the reconciler, the pull resolver and the sync commands.
All models use dataclasses (or NamedTuples for plain rows), following the
patterns established in src/catalog/models.py.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, NamedTuple, Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed (including "nothing to do")
    - GENERAL_ERROR (1): Any failure (config, remote, catalog or unexpected)

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1


class SyncMode(str, Enum):
    """How a push builds the rows it writes."""
    INITIAL = "initial"
    DIFF = "diff"


class ErrorKind(str, Enum):
    """Category of a failed sync, used for reporting."""
    CONFIG = "config"
    REMOTE = "remote"
    CATALOG = "catalog"
    UNEXPECTED = "unexpected"


class SheetRecord(NamedTuple):
    """Values stored in the sheet for one key.

    An empty ``updated`` means the translation defers to ``original``.
    """
    original: str
    updated: str = ""


class SheetRow(NamedTuple):
    """One literal row written to the sheet: key, original value, updated value."""
    key: str
    original: str
    updated: str


@dataclass
class ChangeStats:
    """Counts of keys per reconciliation outcome (reporting only).

    Attributes:
        new: Keys present on the source side only
        removed: Keys present on the destination side only
        changed: Keys whose value differs
        unchanged: Keys whose value is the same

    Example:
        >>> stats = ChangeStats(new=2, unchanged=10)
        >>> stats.total
        12
    """
    new: int = 0
    removed: int = 0
    changed: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        """Number of keys on the source side (new + changed + unchanged)."""
        return self.new + self.changed + self.unchanged


@dataclass
class ExistingSheetState:
    """What the sheet held before a push.

    Attributes:
        records: Key -> SheetRecord, in sheet row order
        data_row_count: Rows below the header, including rows with an empty key
        readable: False when the sheet could not be read and the state is a stand-in
    """
    records: Dict[str, SheetRecord] = field(default_factory=dict)
    data_row_count: int = 0
    readable: bool = True

    @property
    def is_empty(self) -> bool:
        """True when there are no data rows below the header."""
        return self.data_row_count == 0


@dataclass
class ReconcileResult:
    """Rows to write to the sheet plus the statistics that produced them.

    Attributes:
        rows: Rows in write order; the header row comes first when configured
        stats: ChangeStats for the run
        mode: SyncMode used to build the rows
        removed_keys: Keys present in the sheet but no longer in the catalog
    """
    rows: List[SheetRow] = field(default_factory=list)
    stats: ChangeStats = field(default_factory=ChangeStats)
    mode: SyncMode = SyncMode.INITIAL
    removed_keys: List[str] = field(default_factory=list)


@dataclass
class PullPlan:
    """Result of merging sheet values into the current catalog.

    Attributes:
        translations: Final flat catalog (dotted key -> value) to write
        stats: new = sheet-only keys, changed/unchanged against the catalog,
            removed = catalog keys missing from the sheet (kept, reported only)
        group_counts: Leaf count per top-level group of ``translations``
        removed_keys: Catalog keys missing from the sheet
    """
    translations: Dict[str, str] = field(default_factory=dict)
    stats: ChangeStats = field(default_factory=ChangeStats)
    group_counts: Dict[str, int] = field(default_factory=dict)
    removed_keys: List[str] = field(default_factory=list)


@dataclass
class SyncFailure:
    """Why a sync command failed.

    Attributes:
        kind: ErrorKind category
        message: Human-readable, actionable message
        status_code: HTTP status for remote failures, if known
        path: File or directory involved, if any
    """
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    path: Optional[str] = None


@dataclass
class SyncReport:
    """Outcome of a push or pull, returned by the commands.

    Attributes:
        exit_code: Process exit code
        stats: ChangeStats when the command got as far as reconciling
        mode: SyncMode used by a push
        failure: SyncFailure when exit_code is not SUCCESS
        nothing_to_do: True when there was nothing to push or pull
        backup_title: Title of the backup sheet a push created
        pruned_backups: Number of old backups deleted by a push
        files_written: Catalog files a pull wrote
        group_counts: Leaf count per top-level group (pull)
        dry_run: True when a pull only previewed its changes
    """
    exit_code: ExitCode = ExitCode.SUCCESS
    stats: Optional[ChangeStats] = None
    mode: Optional[SyncMode] = None
    failure: Optional[SyncFailure] = None
    nothing_to_do: bool = False
    backup_title: Optional[str] = None
    pruned_backups: int = 0
    files_written: List[str] = field(default_factory=list)
    group_counts: Dict[str, int] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS
