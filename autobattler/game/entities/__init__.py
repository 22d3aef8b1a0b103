"""Unit combat state and roster templates."""

from .unit import CombatUnit
from .unit_templates import get_template, load_unit_templates

__all__ = [
    "CombatUnit",
    "get_template",
    "load_unit_templates",
]
