"""YAML configuration loading and validation.

This module handles loading and saving sync configuration from YAML files.
A missing configuration file is not an error: every field has a default,
and the spreadsheet ID and credentials path can come from the environment.
"""

import os
from typing import Any, Dict, Optional
import yaml

from src.sheets_client.ranges import is_valid_column
from .errors import ConfigError, FilesystemError
from .models import CatalogFormat, DiffPolicy, SheetSyncConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        spreadsheet_id: "1AbC..."
        credentials_path: ".translation-sync/service-account.json"
        sheet_name: null
        key_column: A
        original_value_column: B
        updated_value_column: C
        header_row: 1
        backup_keep: 5
        lang_path: lang
        catalog_format: yaml
        diff_policy: baseline_or_updated
    """

    DEFAULT_CONFIG_PATH = '.translation-sync/config.yaml'

    COLUMN_FIELDS = ('key_column', 'original_value_column', 'updated_value_column')

    KNOWN_FIELDS = {
        'spreadsheet_id',
        'credentials_path',
        'sheet_name',
        'key_column',
        'original_value_column',
        'updated_value_column',
        'header_row',
        'backup_keep',
        'lang_path',
        'catalog_format',
        'diff_policy',
    }

    @classmethod
    def load(cls, config_path: str) -> SheetSyncConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            SheetSyncConfig with parsed configuration (defaults if the file is missing)

        Raises:
            FilesystemError: If file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return SheetSyncConfig()
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except Exception as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        if not content.strip():
            return SheetSyncConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return SheetSyncConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, sync_config: SheetSyncConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            sync_config: SheetSyncConfig to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'spreadsheet_id': sync_config.spreadsheet_id,
            'credentials_path': sync_config.credentials_path,
            'sheet_name': sync_config.sheet_name,
            'key_column': sync_config.key_column,
            'original_value_column': sync_config.original_value_column,
            'updated_value_column': sync_config.updated_value_column,
            'header_row': sync_config.header_row,
            'backup_keep': sync_config.backup_keep,
            'lang_path': sync_config.lang_path,
            'catalog_format': sync_config.catalog_format.value,
            'diff_policy': sync_config.diff_policy.value,
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except Exception as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except Exception as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> SheetSyncConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated SheetSyncConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(k) for k in unknown))}"
            )

        defaults = SheetSyncConfig()

        spreadsheet_id = cls._optional_str(config_dict, 'spreadsheet_id', defaults.spreadsheet_id)
        credentials_path = cls._optional_str(config_dict, 'credentials_path', defaults.credentials_path)
        sheet_name = cls._optional_str(config_dict, 'sheet_name', defaults.sheet_name)

        columns = {}
        for field_name in cls.COLUMN_FIELDS:
            raw = config_dict.get(field_name, getattr(defaults, field_name))
            column = str(raw).strip().upper() if raw is not None else ''
            if not is_valid_column(column):
                raise ConfigError(
                    f"Must be a column letter such as 'A', got {raw!r}",
                    field_name
                )
            columns[field_name] = column

        if len(set(columns.values())) != len(columns):
            raise ConfigError(
                "Key, original value and updated value columns must be distinct"
            )

        header_row = cls._parse_header_row(config_dict.get('header_row', defaults.header_row))

        backup_keep_raw = config_dict.get('backup_keep', defaults.backup_keep)
        try:
            backup_keep = int(backup_keep_raw)
        except (ValueError, TypeError):
            raise ConfigError(
                f"Must be an integer, got {backup_keep_raw!r}",
                'backup_keep'
            )
        if backup_keep < 0:
            raise ConfigError(
                f"Must be at least 0, got {backup_keep}",
                'backup_keep'
            )

        lang_path = cls._optional_str(config_dict, 'lang_path', defaults.lang_path)
        if not lang_path:
            raise ConfigError("Cannot be empty", 'lang_path')

        try:
            catalog_format = CatalogFormat(
                str(config_dict.get('catalog_format', defaults.catalog_format.value)).lower()
            )
        except ValueError:
            raise ConfigError(
                f"Must be one of: {', '.join(f.value for f in CatalogFormat)}",
                'catalog_format'
            )

        try:
            diff_policy = DiffPolicy(
                str(config_dict.get('diff_policy', defaults.diff_policy.value)).lower()
            )
        except ValueError:
            raise ConfigError(
                f"Must be one of: {', '.join(p.value for p in DiffPolicy)}",
                'diff_policy'
            )

        return SheetSyncConfig(
            spreadsheet_id=spreadsheet_id,
            credentials_path=credentials_path,
            sheet_name=sheet_name,
            key_column=columns['key_column'],
            original_value_column=columns['original_value_column'],
            updated_value_column=columns['updated_value_column'],
            header_row=header_row,
            backup_keep=backup_keep,
            lang_path=lang_path,
            catalog_format=catalog_format,
            diff_policy=diff_policy,
        )

    @staticmethod
    def _optional_str(config_dict: Dict[str, Any], field_name: str, default: Optional[str]) -> Optional[str]:
        value = config_dict.get(field_name, default)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @staticmethod
    def _parse_header_row(raw: Any) -> Optional[int]:
        """Parse ``header_row``: a positive row number, or null/"none" for no header."""
        if raw is None or raw is False:
            return None
        if isinstance(raw, str) and raw.strip().lower() in ('none', 'null', ''):
            return None
        try:
            header_row = int(raw)
        except (ValueError, TypeError):
            raise ConfigError(
                f"Must be a row number or 'none', got {raw!r}",
                'header_row'
            )
        if header_row < 1:
            raise ConfigError(
                f"Must be at least 1, got {header_row}",
                'header_row'
            )
        return header_row
