"""
Helper utilities for AgroGuard
Common functions used across modules
"""

import math
from pathlib import Path
from typing import Dict, Any, Iterable

import yaml

from agroguard.utils.errors import ConfigurationError


def load_yaml(file_path: str) -> Dict[str, Any]:
    """
    Load YAML configuration file

    Args:
        file_path: Path to YAML file

    Returns:
        Dictionary with configuration

    Raises:
        ConfigurationError: If the file is missing or not a YAML mapping
    """
    path = Path(file_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {file_path} must contain a mapping")
    return data


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two nested dictionaries, values from override win

    Args:
        base: Base dictionary
        override: Dictionary with overriding values

    Returns:
        New merged dictionary
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def is_finite_number(value: Any) -> bool:
    """Return True for ints/floats that are neither NaN nor infinite."""
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def all_finite(values: Iterable[Any]) -> bool:
    """Check that every value in an iterable is a finite number"""
    return all(is_finite_number(v) for v in values)
