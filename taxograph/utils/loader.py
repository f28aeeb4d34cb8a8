"""
Module used to import pipeline configurations from JSON files
"""

import json
import os
from typing import Any

from taxograph.errors import ConfigurationError


def path_to_entries(path: str | os.PathLike[str]) -> list[dict[str, Any]]:
    """
    Reads a JSON list of objects, e.g. `[{"type": "REROOTING", "root_uri": "..."}]`.

    Raises:
        ConfigurationError: If the file cannot be read or is not a list of objects.
    """
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise ConfigurationError(f"Error: {path} must contain a list of actions")
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Error: entry n°{i} of {path} is not an object")

    return data
