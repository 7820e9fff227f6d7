from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from multiview.config.model import DatasetConfig, GlobalConfig
from multiview.core.exceptions import ConfigError
from multiview.core.view_registry import DEFAULT_VIEW_IDS

logger = logging.getLogger(__name__)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    global.json:

        {
          "ui_title": "Explorer",
          "notification_seconds": 2.0,
          "views": ["grid", "graph", "map", "timeline"],
          "dataset": {"backend": "csv", "url": "data/sample.csv"},
          "state": {"currentView": "graph"}
        }

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if the file is not valid JSON or a block is malformed.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{global_path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    return GlobalConfig(
        ui_title=raw.get("ui_title", "MultiView Explorer"),
        dataset=_parse_dataset(raw.get("dataset"), root),
        views=_parse_views(raw.get("views")),
        notification_seconds=float(raw.get("notification_seconds", 2.0)),
        state=dict(raw.get("state") or {}),
        config_root=root,
    )


def _parse_dataset(raw: Any, root: Path) -> DatasetConfig:
    if not isinstance(raw, dict) or not raw.get("backend"):
        raise ConfigError("global.json needs a 'dataset' block with a 'backend'")

    url = raw.get("url") or ""
    # Relative file paths are resolved against the config root; URLs are kept as-is
    if url and "://" not in url and not Path(url).is_absolute():
        url = str((root / url).resolve())

    return DatasetConfig(
        backend=raw["backend"],
        url=url,
        name=raw.get("name", ""),
        records=raw.get("records"),
    )


def _parse_views(raw: Any) -> list[str]:
    if raw is None:
        return list(DEFAULT_VIEW_IDS)
    if not isinstance(raw, list) or not raw:
        raise ConfigError("'views' must be a non-empty list of view ids")

    unknown = [v for v in raw if v not in DEFAULT_VIEW_IDS]
    if unknown:
        raise ConfigError(f"Unknown view id(s) {unknown}; available: {list(DEFAULT_VIEW_IDS)}")
    return list(raw)


def dataset_options(cfg: DatasetConfig) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if cfg.records is not None:
        options["records"] = cfg.records
    return options
