import json
from pathlib import Path
from typing import Any, Dict, Union

# Explicit imports so that every term type is registered
from . import builders   # pure-fluid alphar types
from . import departure  # departure function types


def load_json_document(path: Union[str, Path]) -> Any:
    p = Path(path)
    return json.loads(p.read_text(encoding="utf-8"))


def load_document_or_path(value: Any) -> Any:
    """Documents pass through; strings and paths are read as JSON files."""
    if isinstance(value, (str, Path)):
        return load_json_document(value)
    return value


def load_model_params(json_path: Union[str, Path]) -> Dict[str, Any]:
    """Model parameters from a file; relative ``BIP``, ``departure`` and ``library`` paths start at the file's folder."""
    data = load_json_document(json_path)
    # Accepts both {"model": ..., "params": {...}} and the bare parameters
    params = dict(data.get("params", data))
    base = Path(json_path).parent
    for key in ("BIP", "departure", "library"):
        value = params.get(key)
        if isinstance(value, str) and not Path(value).is_absolute():
            params[key] = str(base / value)
    return params


def load_fluid_library(value: Any) -> Any:
    """Pure-fluid documents from a list, a JSON file holding a list, or a folder of fluid files."""
    if isinstance(value, (str, Path)) and Path(value).is_dir():
        return [load_json_document(p) for p in sorted(Path(value).glob("*.json"))]
    return load_document_or_path(value)
