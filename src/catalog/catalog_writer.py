"""Writing translation catalogs back to disk.

The writer maps flat dotted keys onto group files (reusing the layout of
the existing catalog where possible), rebuilds the nested structure of each
file and writes all files with a two-phase commit.
"""

import copy
import hashlib
import json
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .catalog_reader import SUPPORTED_EXTENSIONS, CatalogReader
from .errors import CatalogFileError, FilesystemError
from .flattener import KEY_SEPARATOR, inflate, scalar_to_string
from .models import CatalogFormat

logger = logging.getLogger(__name__)


def _match_key(node: Mapping[Any, Any], segment: str) -> Any:
    """Return the key of ``node`` whose string form is ``segment`` (YAML keys may be ints)."""
    if segment in node:
        return segment
    for key in node:
        if str(key) == segment:
            return key
    return segment


@dataclass
class PlannedFile:
    """A group file the writer intends to (re)write.

    Attributes:
        file_path: Destination path of the group file
        group_key: Dotted key prefix the file covers (e.g. ``admin.users``)
        entries: Keys relative to ``group_key`` mapped to their values
        mapping: Nested structure that will be serialized
        changed: False when the file already holds exactly ``mapping``
    """
    file_path: str
    group_key: str
    entries: Dict[str, str] = field(default_factory=dict)
    mapping: Dict[str, Any] = field(default_factory=dict)
    changed: bool = True


class CatalogWriter:
    """Plans and writes translation group files.

    Key placement: ``admin.users.title`` goes to ``admin/users.<ext>`` when
    the ``admin`` directory exists and either holds a ``users`` group file or
    there is no ``admin`` group file beside it; otherwise it goes to
    ``admin.<ext>`` under key ``users.title``. Existing files keep their
    extension; new files use the configured catalog format. Keys with a
    single segment belong to no group and are skipped. Existing files are
    updated in place: only keys whose value changed are rewritten.

    Example:
        >>> writer = CatalogWriter(CatalogFormat.YAML)
        >>> planned = writer.plan("lang/en", {"auth.failed": "Nope, try again"})
        >>> writer.write_files(planned, "lang/en")
    """

    def __init__(
        self,
        catalog_format: CatalogFormat = CatalogFormat.YAML,
        reader: Optional[CatalogReader] = None,
    ):
        self.catalog_format = catalog_format
        self.reader = reader or CatalogReader()

    def _find_group_file(self, directory: str, group: str) -> Optional[str]:
        for extension in SUPPORTED_EXTENSIONS:
            candidate = os.path.join(directory, group + extension)
            if os.path.isfile(candidate):
                return candidate
        return None

    def resolve_target(self, lang_path: str, key: str) -> Optional[Tuple[str, str, str]]:
        """Find the group file that holds ``key``.

        Args:
            lang_path: Language directory
            key: Dotted translation key

        Returns:
            Tuple of (file path, group key prefix, key relative to the file),
            or None when the key has a single segment
        """
        segments = key.split(KEY_SEPARATOR)
        if len(segments) < 2:
            return None

        base = lang_path
        index = 0
        while len(segments) - index > 2:
            subdirectory = os.path.join(base, segments[index])
            if not os.path.isdir(subdirectory):
                break
            if (self._find_group_file(subdirectory, segments[index + 1]) is None
                    and self._find_group_file(base, segments[index]) is not None):
                break
            base = subdirectory
            index += 1

        group = segments[index]
        file_path = (
            self._find_group_file(base, group)
            or os.path.join(base, group + self.catalog_format.extension)
        )
        group_key = KEY_SEPARATOR.join(segments[:index + 1])
        relative_key = KEY_SEPARATOR.join(segments[index + 1:])
        return file_path, group_key, relative_key

    def plan(self, lang_path: str, flat: Mapping[str, str]) -> List[PlannedFile]:
        """Group flat translations into files and build each file's nested mapping.

        Files are returned in order of first appearance in ``flat``.

        Args:
            lang_path: Language directory
            flat: Dotted key -> value

        Returns:
            List of PlannedFile
        """
        planned: Dict[str, PlannedFile] = {}

        for key, value in flat.items():
            target = self.resolve_target(lang_path, key)
            if target is None:
                logger.warning(f"Key '{key}' has no group segment - skipping")
                continue
            file_path, group_key, relative_key = target
            entry = planned.get(file_path)
            if entry is None:
                entry = PlannedFile(file_path=file_path, group_key=group_key)
                planned[file_path] = entry
            entry.entries[relative_key] = value

        for entry in planned.values():
            existing = self._read_existing(entry.file_path)
            if existing is None:
                entry.mapping = inflate(entry.entries)
                entry.changed = True
            else:
                entry.mapping = self.overlay(existing, entry.entries)
                entry.changed = entry.mapping != existing

        return list(planned.values())

    def _read_existing(self, file_path: str) -> Optional[Dict[Any, Any]]:
        if not os.path.isfile(file_path):
            return None
        try:
            return self.reader.read_mapping(file_path)
        except (CatalogFileError, FilesystemError) as e:
            logger.debug(f"Cannot compare with {file_path}: {e}")
            return None

    def overlay(self, existing: Mapping[Any, Any], entries: Mapping[str, str]) -> Dict[Any, Any]:
        """Apply flat entries on top of a file's current mapping.

        Leaves whose string form already equals the entry keep their original
        value and type; leaves the catalog never exports (lists, for example)
        are left in place. Only changed or new keys are written as strings.

        Args:
            existing: Mapping currently stored in the group file
            entries: Keys relative to the file mapped to their values

        Returns:
            New nested mapping; ``existing`` is not modified

        Example:
            >>> writer.overlay({"failed": "Bad creds", "retries": 3}, {"failed": "Nope", "retries": "3"})
            {'failed': 'Nope', 'retries': 3}
        """
        merged = copy.deepcopy(dict(existing))
        for relative_key, value in entries.items():
            segments = relative_key.split(KEY_SEPARATOR)
            node = merged
            for segment in segments[:-1]:
                name = _match_key(node, segment)
                child = node.get(name)
                if not isinstance(child, dict):
                    child = {}
                    node[name] = child
                node = child
            leaf = _match_key(node, segments[-1])
            if leaf in node and scalar_to_string(node[leaf]) == value:
                continue
            node[leaf] = value
        return merged

    def render(self, file_path: str, mapping: Mapping[str, Any]) -> str:
        """Serialize ``mapping`` in the format implied by ``file_path``'s extension.

        Key order is the mapping's insertion order.
        """
        if file_path.lower().endswith('.json'):
            return json.dumps(mapping, indent=4, ensure_ascii=False) + '\n'
        return yaml.safe_dump(
            dict(mapping),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=1000,
        )

    def write_mapping(self, file_path: str, mapping: Mapping[str, Any]) -> None:
        """Write a single group file.

        Raises:
            FilesystemError: If the file cannot be written
        """
        directory = os.path.dirname(file_path) or '.'
        self.write_files(
            [PlannedFile(file_path=file_path, group_key='', mapping=dict(mapping))],
            directory,
        )

    def write_files(self, planned: List[PlannedFile], lang_path: str) -> List[str]:
        """Write planned files using a two-phase commit.

        Phase 1 renders every file into a temporary directory inside
        ``lang_path``; phase 2 moves them into place. A failure in phase 1
        leaves the catalog untouched. A failure in phase 2 aborts the run;
        files already moved are not rolled back.

        Args:
            planned: Files to write (unchanged entries are skipped)
            lang_path: Language directory, created if missing

        Returns:
            Paths of the files written

        Raises:
            FilesystemError: If file operations fail
        """
        to_write = [entry for entry in planned if entry.changed]
        if not to_write:
            logger.debug("No files to write")
            return []

        logger.debug(f"Writing {len(to_write)} file(s) atomically")

        try:
            os.makedirs(lang_path, exist_ok=True)
            temp_dir = tempfile.mkdtemp(prefix='.translation-sync-', dir=lang_path)
        except OSError as e:
            raise FilesystemError(lang_path, 'create_directory', str(e))

        try:
            # Phase 1: render into the temp directory
            staged: List[Tuple[str, str]] = []
            for entry in to_write:
                path_hash = hashlib.md5(entry.file_path.encode()).hexdigest()[:8]
                temp_file_path = os.path.join(
                    temp_dir, f"{path_hash}_{os.path.basename(entry.file_path)}"
                )
                try:
                    content = self.render(entry.file_path, entry.mapping)
                    with open(temp_file_path, 'w', encoding='utf-8') as f:
                        f.write(content)
                except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
                    logger.error(f"Phase 1 failed: {e} - rolling back")
                    raise FilesystemError(
                        entry.file_path,
                        'write',
                        f"Atomic write phase 1 failed: {str(e)}"
                    )
                staged.append((temp_file_path, entry.file_path))

            # Phase 2: move into place
            written: List[str] = []
            for temp_file_path, final_file_path in staged:
                try:
                    final_dir = os.path.dirname(final_file_path)
                    if final_dir:
                        os.makedirs(final_dir, exist_ok=True)
                    shutil.move(temp_file_path, final_file_path)
                except OSError as e:
                    logger.error(f"Phase 2 failed: {e} - {len(written)} file(s) already written")
                    raise FilesystemError(
                        final_file_path,
                        'move',
                        f"Atomic write phase 2 failed: {str(e)}"
                    )
                written.append(final_file_path)

            logger.debug(f"Successfully wrote {len(written)} file(s)")
            return written

        finally:
            try:
                if os.path.exists(temp_dir):
                    shutil.rmtree(temp_dir)
            except OSError as e:
                logger.warning(f"Failed to clean up temp directory {temp_dir}: {e}")
