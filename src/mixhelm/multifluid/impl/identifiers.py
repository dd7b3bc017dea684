"""Component identifiers: which naming scheme indexes the binary documents.

Every pure-fluid document names its fluid three ways in ``INFO``: ``NAME``,
``CAS`` and ``REFPROP_NAME``, plus a free list of ``ALIASES``.  Binary and
departure documents may key pairs by any one of them, so the scheme is chosen
per model by looking up every pair.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from mixhelm.common.exceptions import DuplicateAlias, MissingBinaryPair, UnresolvableIdentifiers

from .reducing import get_BIPdep

logger = logging.getLogger(__name__)

# Preference order when more than one scheme resolves every pair
IDENTIFIER_KINDS = ("CAS", "Name", "REFPROP")


def _info(j: Dict[str, Any]) -> Dict[str, Any]:
    if "INFO" not in j:
        raise KeyError("Missing 'INFO' in pure fluid document")
    return j["INFO"]


def collect_identifiers(pure_json: Sequence[Dict[str, Any]]) -> Dict[str, List[str]]:
    CAS: List[str] = []
    Name: List[str] = []
    REFPROP: List[str] = []
    for j in pure_json:
        info = _info(j)
        Name.append(info["NAME"])
        CAS.append(info["CAS"])
        REFPROP.append(info.get("REFPROP_NAME", info["NAME"]))
    return {"CAS": CAS, "Name": Name, "REFPROP": REFPROP}


def _count_found(BIPcollection: Sequence[Dict[str, Any]], identifiers: Sequence[str]) -> Tuple[int, int]:
    found = total = 0
    for i in range(len(identifiers)):
        for j in range(i + 1, len(identifiers)):
            total += 1
            try:
                get_BIPdep(BIPcollection, (identifiers[i], identifiers[j]))
            except MissingBinaryPair:
                continue
            found += 1
    return found, total


def select_identifier(
    BIPcollection: Sequence[Dict[str, Any]],
    identifierset: Mapping[str, Sequence[str]],
    flags: Optional[Dict[str, Any]] = None,
) -> str:
    """First identifier kind under which every binary pair can be found.

    The lookups ignore the estimation flags, so an estimate never stands in
    for data stored under another kind.  When no kind finds every pair and
    estimation is enabled, the kind finding the most pairs is used and the
    rest are estimated.
    """
    flags = flags or {}
    counts: Dict[str, int] = {}
    for key in IDENTIFIER_KINDS:
        identifiers = identifierset[key]
        found, total = _count_found(BIPcollection, identifiers)
        if found == total:
            logger.info("Matching binary pairs by %s: %s", key, list(identifiers))
            return key
        logger.debug("Identifier kind %s resolves %d of %d pairs", key, found, total)
        counts[key] = found
    if "estimate" in flags or flags.get("force-estimate"):
        # max keeps the first of equal counts, i.e. the preferred kind
        key = max(IDENTIFIER_KINDS, key=lambda k: counts[k])
        logger.info("No identifier kind resolves every pair; matching by %s and estimating the rest", key)
        return key
    raise UnresolvableIdentifiers("Unable to match any of the identifier options")


def build_alias_map(pure_json: Sequence[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Reverse lookup from every name, CAS number and alias to its fluid document.

    A key claimed by two different fluids raises :class:`DuplicateAlias`.
    """
    aliasmap: Dict[str, Dict[str, Any]] = {}
    owner: Dict[str, str] = {}

    def claim(key: str, kind: str, j: Dict[str, Any], name: str) -> None:
        if key in owner and owner[key] != name:
            raise DuplicateAlias(f"Duplicated {kind} [{key}] claimed by both {owner[key]} and {name}")
        owner[key] = name
        aliasmap[key] = j

    for j in pure_json:
        info = _info(j)
        name = info["NAME"]
        refprop = info.get("REFPROP_NAME", name)
        for k in ("NAME", "CAS", "REFPROP_NAME"):
            val = info.get(k)
            if val is None:
                continue
            # REFPROP names equal to the fluid name, or marked invalid, add nothing
            if k == "REFPROP_NAME" and (val == name or val == "N/A"):
                continue
            claim(val, "reverse lookup identifier " + k, j, name)
        for alias in info.get("ALIASES", []):
            if alias in (name, refprop):
                continue
            claim(alias, "alias", j, name)
    return aliasmap


def make_pure_components_JSON(
    components: Sequence[Union[str, Dict[str, Any]]],
    library: Optional[Sequence[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """Pure-fluid documents for ``components``.

    Components are either documents already, or strings resolved by name, CAS
    number or alias against the documents of ``library``.
    """
    if isinstance(components, (str, dict)):
        raise TypeError("components must be a list")
    if all(isinstance(c, dict) for c in components):
        return list(components)

    aliasmap = build_alias_map(library or [])
    pure_json: List[Dict[str, Any]] = []
    for c in components:
        if isinstance(c, dict):
            pure_json.append(c)
        elif c in aliasmap:
            pure_json.append(aliasmap[c])
        else:
            raise KeyError(f"Component '{c}' not found in fluid library")
    return pure_json
