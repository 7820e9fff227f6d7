from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DatasetConfig:
    """
    Parsed 'dataset' block of global.json.

    - backend: backend type ("csv", "memory", ...)
    - url: source location; relative file paths resolve against the config root
    - records: inline records for the memory backend
    """
    backend: str
    url: str = ""
    name: str = ""
    records: Optional[List[Dict[str, Any]]] = None


@dataclass
class GlobalConfig:
    ui_title: str
    dataset: DatasetConfig
    views: List[str] = field(default_factory=list)
    notification_seconds: float = 2.0
    state: Dict[str, Any] = field(default_factory=dict)
    config_root: Optional[Path] = None
