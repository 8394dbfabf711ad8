"""Translation catalog library for sheet sync.

This package reads and writes the per-language translation catalog (one
YAML or JSON file per translation group, optionally nested in
subdirectories) and converts between nested mappings and flat dotted keys.
"""

from .catalog_reader import CatalogReader
from .catalog_writer import CatalogWriter, PlannedFile
from .config_loader import ConfigLoader
from .errors import (
    CatalogError,
    FilesystemError,
    ConfigError,
    CatalogFileError,
)
from .flattener import flatten, inflate
from .models import CatalogFormat, DiffPolicy, SheetSyncConfig, HEADER_TITLES

__all__ = [
    'CatalogReader',
    'CatalogWriter',
    'PlannedFile',
    'ConfigLoader',
    'CatalogError',
    'FilesystemError',
    'ConfigError',
    'CatalogFileError',
    'flatten',
    'inflate',
    'CatalogFormat',
    'DiffPolicy',
    'SheetSyncConfig',
    'HEADER_TITLES',
]
