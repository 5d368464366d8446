from pathlib import Path
from typing import Any, Dict

import yaml

YAML_SUFFIXES = (".yml", ".yaml")


def load_yml(file_path: str) -> Dict[str, Any]:
    """Load a YAML settings file into a dict. An empty file yields {}."""
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path.absolute()}")

    if path.suffix not in YAML_SUFFIXES:
        raise ValueError(f"{path.name} is not a YAML settings file")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Cannot parse {path.name}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a mapping at the top level")
    return data
