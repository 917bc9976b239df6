"""Configuration loader for relped.

Behavior:
- Load defaults.
- If a config path is given, or `RELPED_CONFIG` is set, load that JSON file and merge.
- Environment variables override file values (RELPED_MAX_DISTANCE,
  RELPED_SHORTEST_PATH, RELPED_DIRECTED) only when no explicit path was given.

Command-line flags are applied on top by the CLI.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
import os
import json
import logging
from typing import Any, Optional

from .degree import MAX_DEGREE
from .graph import SHORTEST_PATH_METHODS


@dataclass
class Config:
    max_distance: int = int(MAX_DEGREE)
    directed: bool = True
    normalize: bool = False
    keep_self_loops: bool = False
    remove_edge_arrows: bool = False
    shortest_only: bool = True
    shortest_path: str = "dijkstra"

    def validate(self) -> "Config":
        """Clamp or reset out-of-range values, logging what changed."""
        if self.max_distance > MAX_DEGREE:
            logging.warning("Estimating relational distance beyond %d is ill-advised; using %d", MAX_DEGREE, MAX_DEGREE)
            self.max_distance = int(MAX_DEGREE)
        if self.max_distance < 1:
            logging.warning("max_distance %d leaves nothing to insert; using 1", self.max_distance)
            self.max_distance = 1
        if self.shortest_path not in SHORTEST_PATH_METHODS:
            logging.warning("Unknown shortest path method %r; using dijkstra", self.shortest_path)
            self.shortest_path = "dijkstra"
        return self


def _load_json_file(path: Path) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        logging.warning("Could not read config %s (%s); using defaults", path, exc)
        return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from (1) defaults, (2) JSON file, (3) env vars.

    :param config_path: optional path to a JSON config file. If not provided
                        will use environment variable `RELPED_CONFIG` if set.
    """
    cfg = Config()

    # 1) config file
    cp = config_path or os.environ.get("RELPED_CONFIG")
    if cp:
        data = _load_json_file(Path(cp))
        if isinstance(data, dict):
            for f in fields(Config):
                if f.name not in data or data[f.name] is None:
                    continue
                if f.type in ("bool", bool):
                    setattr(cfg, f.name, _as_bool(data[f.name]))
                elif f.type in ("int", int):
                    setattr(cfg, f.name, int(data[f.name]))
                else:
                    setattr(cfg, f.name, str(data[f.name]))

    # 2) an explicit config_path is authoritative; env only fills in otherwise
    if config_path is None:
        if os.environ.get("RELPED_MAX_DISTANCE"):
            cfg.max_distance = int(os.environ["RELPED_MAX_DISTANCE"])
        if os.environ.get("RELPED_SHORTEST_PATH"):
            cfg.shortest_path = os.environ["RELPED_SHORTEST_PATH"]
        if os.environ.get("RELPED_DIRECTED"):
            cfg.directed = _as_bool(os.environ["RELPED_DIRECTED"])

    return cfg.validate()
