"""
Utils Package

Serialization utilities for the persistence boundary.
"""

from .serialization import (
    infer_scoring_kind,
    parse_part_scoring,
    serialize_config,
    deserialize_config,
    serialize_part,
    deserialize_part,
    load_parts_json,
    save_parts_json,
    load_config_json,
    save_config_json,
)

__all__ = [
    "infer_scoring_kind",
    "parse_part_scoring",
    "serialize_config",
    "deserialize_config",
    "serialize_part",
    "deserialize_part",
    "load_parts_json",
    "save_parts_json",
    "load_config_json",
    "save_config_json",
]
