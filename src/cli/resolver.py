"""Resolution of sheet records into catalog values for a pull."""

import logging
from typing import Dict, Mapping

from src.catalog.flattener import KEY_SEPARATOR, top_level_group

from .models import ChangeStats, PullPlan, SheetRecord

logger = logging.getLogger(__name__)


class PullResolver:
    """Turns sheet records into the catalog a pull writes.

    The effective value of a record is its Updated Value when non-empty,
    otherwise its Original Value. Pulling never deletes catalog keys: keys
    missing from the sheet are kept and only reported.

    Example:
        >>> resolver = PullResolver()
        >>> resolver.resolve({"auth.failed": SheetRecord("Bad creds", "")})
        {'auth.failed': 'Bad creds'}
    """

    def resolve(self, records: Mapping[str, SheetRecord]) -> Dict[str, str]:
        """Effective value per key, in sheet row order."""
        return {
            key: record.updated if record.updated != "" else record.original
            for key, record in records.items()
        }

    def merge(self, resolved: Mapping[str, str], snapshot: Mapping[str, str]) -> PullPlan:
        """Overlay resolved sheet values on the current catalog.

        Catalog keys keep their position; sheet-only keys are appended in
        sheet order.

        Args:
            resolved: Effective sheet values (dotted key -> value)
            snapshot: Current flat catalog

        Returns:
            PullPlan with the final catalog, stats and per-group counts
        """
        translations: Dict[str, str] = {}
        stats = ChangeStats()
        removed_keys = []

        for key, value in snapshot.items():
            if key in resolved:
                new_value = resolved[key]
                if new_value == value:
                    stats.unchanged += 1
                else:
                    stats.changed += 1
                    logger.debug(f"Changed: {key}")
                translations[key] = new_value
            else:
                translations[key] = value
                removed_keys.append(key)

        for key, value in resolved.items():
            if key not in snapshot:
                translations[key] = value
                stats.new += 1

        stats.removed = len(removed_keys)
        if removed_keys:
            logger.info(f"{len(removed_keys)} catalog key(s) not in sheet - keeping them")

        return PullPlan(
            translations=translations,
            stats=stats,
            group_counts=self.group_counts(translations),
            removed_keys=removed_keys,
        )

    @staticmethod
    def group_counts(translations: Mapping[str, str]) -> Dict[str, int]:
        """Count leaves per top-level group, in order of first appearance.

        Counts describe the resulting catalog files, so catalog keys kept
        from disk are included and keys without a group segment (never
        written) are not.
        """
        counts: Dict[str, int] = {}
        for key in translations:
            if KEY_SEPARATOR not in key:
                continue
            group = top_level_group(key)
            counts[group] = counts.get(group, 0) + 1
        return counts
