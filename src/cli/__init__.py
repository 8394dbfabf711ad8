"""Command-line interface for translation sheet sync.

This package provides the `translation-sync` CLI tool that pushes a local
translation catalog to a Google Sheets spreadsheet and pulls translator
edits back. It integrates the catalog reader/writer, the reconciler and
the Sheets API client into a command-line workflow with progress
indication and error handling.
"""

from .push_command import PushCommand
from .pull_command import PullCommand
from .init_command import InitCommand
from .reconciler import Reconciler
from .resolver import PullResolver
from .models import (
    ExitCode,
    SyncMode,
    ErrorKind,
    SheetRecord,
    SheetRow,
    ChangeStats,
    ExistingSheetState,
    ReconcileResult,
    PullPlan,
    SyncFailure,
    SyncReport,
)
from .errors import CLIError, LanguageNotFoundError, InitError

__all__ = [
    'PushCommand',
    'PullCommand',
    'InitCommand',
    'Reconciler',
    'PullResolver',
    'ExitCode',
    'SyncMode',
    'ErrorKind',
    'SheetRecord',
    'SheetRow',
    'ChangeStats',
    'ExistingSheetState',
    'ReconcileResult',
    'PullPlan',
    'SyncFailure',
    'SyncReport',
    'CLIError',
    'LanguageNotFoundError',
    'InitError',
]
