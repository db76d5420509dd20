"""
Functions for exporting decoded UniFi entities to various formats.

This module provides simple export utilities for the models returned by
:class:`~unifi_client.api_client.UnifiController`, allowing export to CSV,
JSON, and plain Python dictionaries.
"""

import csv
import json
from typing import Any, Dict, List, Optional, Sequence

from .logging import get_logger
from .models.base import UnifiModel

logger = get_logger(__name__)


def to_dict_list(items: Sequence[UnifiModel]) -> List[Dict[str, Any]]:
    """
    Convert a list of UniFi model objects to a list of dictionaries.

    Addresses, timestamps and durations are converted to strings and numbers,
    so the result can be passed straight to :func:`json.dumps`.

    Args:
        items: List of UniFi model objects (Device, Station, Alarm or Site)

    Returns:
        List of dictionaries with standardized structure
    """
    return [item.to_dict() for item in items]


def _flatten_dict(
    d: Dict[str, Any], parent_key: str = "", sep: str = "_"
) -> Dict[str, Any]:
    """
    Flatten nested dictionaries using a separator.

    Lists of dictionaries are flattened with their index in the key, e.g.
    ``radios_0_name``; other lists are joined with commas.
    """
    items = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.extend(_flatten_dict(v, new_key, sep=sep).items())
        elif isinstance(v, list):
            if v and all(isinstance(i, dict) for i in v):
                for i, item in enumerate(v):
                    items.extend(_flatten_dict(item, f"{new_key}{sep}{i}", sep=sep).items())
            else:
                items.append((new_key, ", ".join(str(i) for i in v)))
        else:
            items.append((new_key, v))

    return dict(items)


def export_csv(
    items: Sequence[UnifiModel],
    path: str,
    fields: Optional[List[str]] = None,
    flatten_nested: bool = False,
) -> None:
    """
    Export UniFi objects to a CSV file.

    Args:
        items: List of UniFi model objects
        path: Path where the CSV file will be saved
        fields: Optional list of specific fields to include in the export.
                If not provided, the fields of the first item are used.
        flatten_nested: Whether to flatten nested structures (default: False).
                        For example, stats.system.uptime becomes stats_system_uptime
    """
    item_dicts = to_dict_list(items)
    if flatten_nested:
        item_dicts = [_flatten_dict(item) for item in item_dicts]

    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        if not item_dicts:
            logger.debug(f"No items to export, writing empty file {path}")
            return

        final_fields = fields if fields else list(item_dicts[0].keys())
        writer = csv.DictWriter(csvfile, fieldnames=final_fields, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(item_dicts)

    logger.debug(f"Exported {len(item_dicts)} items to {path}")


def export_json(items: Sequence[UnifiModel], path: str, indent: int = 2) -> None:
    """
    Export UniFi objects to a JSON file.

    Args:
        items: List of UniFi model objects
        path: Path where the JSON file will be saved
        indent: Number of spaces for indentation in the JSON file (default: 2)
    """
    item_dicts = to_dict_list(items)

    with open(path, "w", encoding="utf-8") as jsonfile:
        json.dump(item_dicts, jsonfile, indent=indent)

    logger.debug(f"Exported {len(item_dicts)} items to {path}")
