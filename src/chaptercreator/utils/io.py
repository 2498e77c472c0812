"""File I/O utilities — YAML and JSON handling."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

_yaml = YAML()
_yaml.preserve_quotes = True
_yaml.default_flow_style = False


def write_yaml(path: Path | str, data: dict) -> None:
    """Write a dict to a YAML file atomically (write to temp, then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        suffix=path.suffix,
        delete=False,
        encoding="utf-8",
    ) as tmp:
        _yaml.dump(data, tmp)
        tmp_path = Path(tmp.name)

    tmp_path.replace(path)


def read_yaml(path: Path | str) -> Any:
    """Read a YAML file and return its plain-Python contents."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        return _to_plain(_yaml.load(f))


def read_json(path: Path | str) -> Any:
    """Read a JSON file."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def read_data_file(path: Path | str) -> Any:
    """Read a JSON or YAML file, chosen by extension."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix.lower() == ".json":
        return read_json(path)
    return read_yaml(path)


def _to_plain(node: Any) -> Any:
    """Convert ruamel's round-trip containers into dicts and lists."""
    if isinstance(node, dict):
        return {str(k): _to_plain(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_to_plain(v) for v in node]
    return node
