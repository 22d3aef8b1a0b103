"""Unit templates loaded from YAML.

Each template is a named set of base stats (``assets/units.yaml``). Battle
files refer to templates by name and may override individual stats.
"""

import os
from typing import Optional

import yaml

from ...core.data import UnitStats


def _default_templates_path() -> str:
    current_dir = os.path.dirname(os.path.abspath(__file__))
    package_root = os.path.dirname(os.path.dirname(current_dir))
    return os.path.join(package_root, "assets", "units.yaml")


def load_unit_templates(yaml_path: Optional[str] = None) -> dict[str, UnitStats]:
    """Load unit templates from a YAML file.

    Returns:
        Dictionary mapping template names to UnitStats

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file structure or a stat value is invalid
    """
    yaml_path = yaml_path or _default_templates_path()

    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Unit templates file not found: {yaml_path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse unit templates {yaml_path}: {e}")

    try:
        entries = data["unit_templates"]
    except (KeyError, TypeError):
        raise ValueError(f"Invalid template structure in {yaml_path}: missing 'unit_templates'")
    if not isinstance(entries, dict):
        raise ValueError(f"'unit_templates' in {yaml_path} must be a mapping")

    templates = {}
    for name, stats in entries.items():
        if not isinstance(stats, dict):
            raise ValueError(f"Template {name} in {yaml_path} must be a mapping")
        templates[name] = UnitStats.from_dict(name, stats)
    return templates


_templates: Optional[dict[str, UnitStats]] = None


def get_template(name: str) -> UnitStats:
    """Get a template from the default roster.

    Raises:
        KeyError: If the template name is not recognized
    """
    global _templates
    if _templates is None:
        _templates = load_unit_templates()

    if name not in _templates:
        raise KeyError(f"No template found for unit: {name}")
    return _templates[name]
