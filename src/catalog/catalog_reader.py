"""Reading translation catalogs from disk.

A catalog is a directory per language holding one file per translation
group (``auth.yaml``, ``validation.json``), optionally nested in
subdirectories. The reader turns it into a flat snapshot of dotted keys.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import CatalogFileError, FilesystemError
from .flattener import flatten, join_key

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.yaml', '.yml', '.json')


class CatalogReader:
    """Collects translation files into a flat, ordered key/value snapshot.

    Traversal order: the files of a directory sorted by name, each file's
    keys in declaration order, then the subdirectories sorted by name.
    Unparsable files are skipped with a warning; files whose top level is
    not a mapping are skipped with an info message.

    Example:
        >>> reader = CatalogReader()
        >>> snapshot = reader.collect("lang/en")
        >>> snapshot["auth.failed"]
        'These credentials do not match our records.'
    """

    def list_entries(self, path: str) -> Tuple[List[str], List[str]]:
        """List translation files and subdirectories of ``path``.

        Args:
            path: Directory to list

        Returns:
            Tuple of (file paths, directory paths), each sorted by name

        Raises:
            FilesystemError: If the directory cannot be listed
        """
        try:
            names = sorted(os.listdir(path))
        except PermissionError:
            raise FilesystemError(path, 'list', 'Permission denied')
        except OSError as e:
            raise FilesystemError(path, 'list', str(e))

        files: List[str] = []
        directories: List[str] = []
        for name in names:
            if name.startswith('.'):
                continue
            full_path = os.path.join(path, name)
            if os.path.isdir(full_path):
                directories.append(full_path)
            elif os.path.splitext(name)[1].lower() in SUPPORTED_EXTENSIONS:
                files.append(full_path)
        return files, directories

    def read_mapping(self, file_path: str) -> Optional[Dict[Any, Any]]:
        """Parse a translation file.

        Args:
            file_path: Path to a .yaml, .yml or .json file

        Returns:
            The parsed top-level mapping, or None if the file does not hold a mapping

        Raises:
            FilesystemError: If the file cannot be read
            CatalogFileError: If the file cannot be parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except PermissionError:
            raise FilesystemError(file_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(file_path, 'read', str(e))

        extension = os.path.splitext(file_path)[1].lower()
        try:
            if extension == '.json':
                data = json.loads(content) if content.strip() else None
            else:
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogFileError(file_path, f"invalid syntax: {e}")

        if not isinstance(data, dict):
            return None
        return data

    def collect(self, lang_path: str, prefix: str = '') -> Dict[str, str]:
        """Collect every translation under ``lang_path`` as dotted keys.

        Args:
            lang_path: Language directory (e.g. ``lang/en``)
            prefix: Key prefix for this directory (empty at the language root)

        Returns:
            Ordered dict of dotted key -> string value

        Raises:
            FilesystemError: If a directory cannot be listed
        """
        translations: Dict[str, str] = {}

        files, directories = self.list_entries(lang_path)

        for file_path in files:
            group = os.path.splitext(os.path.basename(file_path))[0]
            try:
                mapping = self.read_mapping(file_path)
            except (CatalogFileError, FilesystemError) as e:
                logger.warning(f"{e} - skipping")
                continue

            if mapping is None:
                logger.info(f"{file_path} does not contain a mapping - skipping")
                continue

            translations.update(flatten(mapping, join_key(prefix, group)))

        for directory in directories:
            dir_name = os.path.basename(directory)
            translations.update(self.collect(directory, join_key(prefix, dir_name)))

        return translations
