"""Public builders for multi-fluid models."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .impl.identifiers import make_pure_components_JSON
from .impl.loader import load_document_or_path, load_fluid_library, load_json_document, load_model_params
from .impl.multifluid import MultiFluid, _build_multifluid_model

Document = Dict[str, Any]


def _load_components(components: Sequence[Union[str, Path, Document]]) -> List[Union[str, Document]]:
    # Strings naming existing files are fluid files; other strings are looked up by name
    loaded: List[Union[str, Document]] = []
    for c in components:
        if isinstance(c, (str, Path)) and Path(c).is_file():
            loaded.append(load_json_document(c))
        else:
            loaded.append(str(c) if isinstance(c, Path) else c)
    return loaded


def build_multifluid_model(
    components: Sequence[Union[str, Path, Document]],
    BIP: Union[str, Path, Sequence[Document], None] = None,
    departure: Union[str, Path, Sequence[Document], None] = None,
    flags: Optional[Dict[str, Any]] = None,
    library: Union[str, Path, Sequence[Document], None] = None,
) -> MultiFluid:
    """Build a :class:`MultiFluid` model.

    ``components`` holds pure-fluid documents, paths to fluid files, or names
    (``NAME``, CAS number, ``REFPROP_NAME`` or alias) resolved against
    ``library``.  ``BIP`` and ``departure`` are document lists or JSON file
    paths; a single component needs neither.
    """
    if isinstance(components, (str, dict)):
        raise TypeError("components must be a list")
    lib = load_fluid_library(library) if library is not None else None
    pure_json = make_pure_components_JSON(_load_components(components), lib)

    BIPcollection: Sequence[Document] = []
    depcollection: Sequence[Document] = []
    if len(pure_json) > 1:
        if BIP is None:
            BIP = []
        if departure is None:
            departure = []
        BIPcollection = load_document_or_path(BIP)
        depcollection = load_document_or_path(departure)
    return _build_multifluid_model(pure_json, BIPcollection, depcollection, flags or {})


def multifluid_factory(params: Dict[str, Any]) -> MultiFluid:
    """Build from parameters with ``components`` and, for mixtures, ``BIP`` and ``departure``.

    Optional keys: ``flags``, ``library``.
    """
    if "components" not in params:
        raise KeyError("Missing 'components' in multifluid params")
    components = params["components"]
    if len(components) > 1:
        for key in ("BIP", "departure"):
            if key not in params:
                raise KeyError(f"Missing '{key}' in multifluid params")
    return build_multifluid_model(
        components,
        BIP=params.get("BIP"),
        departure=params.get("departure"),
        flags=params.get("flags"),
        library=params.get("library"),
    )


def load_multifluid_from_json(json_path: Union[str, Path]) -> MultiFluid:
    return multifluid_factory(load_model_params(json_path))
