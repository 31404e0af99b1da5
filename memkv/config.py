"""Configuration objects for memkv."""

from dataclasses import dataclass


@dataclass
class LoadConfig:
    """Configuration for loading YAML sources into a store."""

    prefix: str = "/"
    """Path under which the flattened keys are placed."""
