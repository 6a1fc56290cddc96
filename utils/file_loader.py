"""
File Loader
Utilities for loading exported Aseprite animation files
"""

import os
from typing import Optional

from core.aseprite_importer import ImportResult, parse_aseprite_json
from core.errors import AnimationError

# Dedicated extension so ordinary JSON files are not picked up by accident
RECOGNIZED_EXTENSIONS = ('.ase-json', '.json')


def is_aseprite_export(path: str) -> bool:
    return path.lower().endswith(RECOGNIZED_EXTENSIONS)


def load_aseprite_json_strict(json_path: str, verbose: bool = True) -> ImportResult:
    """
    Load and import an exported animation file

    Raises:
        OSError: The file could not be read
        SchemaViolation / NoAnimations: The export is not usable
    """
    with open(json_path, 'r', encoding='utf-8') as f:
        text = f.read()
    return parse_aseprite_json(text, verbose=verbose)


def load_aseprite_json(json_path: str, verbose: bool = True) -> Optional[ImportResult]:
    """
    Load animation data from an exported JSON file

    Args:
        json_path: Path to the JSON file
        verbose: Print per-tag warnings

    Returns:
        ImportResult, or None if the file could not be read or imported
    """
    try:
        return load_aseprite_json_strict(json_path, verbose=verbose)
    except OSError as e:
        print(f"Error: unable to open animation definition file '{json_path}': {e}")
    except AnimationError as e:
        print(f"Error: unable to import '{os.path.basename(json_path)}': {e}")
    return None
