"""Departure functions: builders, name/alias lookup and the NxN departure matrix.

A departure document carries its own ``type`` plus coefficient arrays::

    {"Name": "Methane-Ethane", "aliases": ["GERG-2008 CH4/C2H6"],
     "type": "GERG-2008", "Npower": 2, "n": [...], "t": [...], "d": [...],
     "eta": [...], "beta": [...], "gamma": [...], "epsilon": [...]}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from mixhelm.common.exceptions import MissingDepartureFunction, ShapeMismatch

from .builders import build_double_exponential, build_power_terms, collect_arrays
from .reducing import get_BIPdep
from .registry import build, check_type, register
from .terms import Chebyshev2DEOSTerm, DepartureTerms, GaussianEOSTerm, GERG2004EOSTerm, NullEOSTerm

logger = logging.getLogger(__name__)


def _power_head(term: Dict[str, Any], arrays: Dict[str, np.ndarray], Npower: int, what: str) -> List[Any]:
    head: Dict[str, Any] = {k: arrays[k][:Npower] for k in ("n", "t", "d")}
    if term.get("l") is not None:
        head["l"] = np.asarray(term["l"], dtype=float)[:Npower]
    return build_power_terms(head, what)


@register("departure", "Exponential")
def _build_exponential(term: Dict[str, Any]) -> List[Any]:
    # Don't add a departure function if there are no coefficients provided
    if len(term.get("n", [])) == 0:
        return []
    return build_power_terms(term, "Exponential departure")


register("departure", "DoubleExponential")(build_double_exponential)


@register("departure", "GERG-2004", "GERG-2008")
def _build_gerg2004(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "eta", "beta", "gamma", "epsilon"], "GERG")
    if "Npower" not in term:
        raise KeyError("Missing 'Npower' in GERG term")
    Npower = int(term["Npower"])
    kinds = _power_head(term, arrays, Npower, "GERG power")
    kinds.append(GERG2004EOSTerm(**{k: v[Npower:] for k, v in arrays.items()}))
    return kinds


@register("departure", "Gaussian+Exponential")
def _build_gaussian_exponential(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "eta", "beta", "gamma", "epsilon"], "Gaussian+Exponential")
    if "Npower" not in term:
        raise KeyError("Missing 'Npower' in Gaussian+Exponential term")
    Npower = int(term["Npower"])
    kinds = _power_head(term, arrays, Npower, "Gaussian+Exponential power")
    kinds.append(GaussianEOSTerm(**{k: v[Npower:] for k, v in arrays.items()}))
    return kinds


@register("departure", "Chebyshev2D")
def _build_chebyshev2d(term: Dict[str, Any]) -> List[Any]:
    # Degrees in tau and delta; there are (Ntau+1)*(Ndelta+1) coefficients
    Ntau = int(term["Ntau"])
    Ndelta = int(term["Ndelta"])
    a = np.asarray(term["a"], dtype=float)
    if (Ntau + 1) * (Ndelta + 1) != a.size:
        raise ShapeMismatch(
            f"Provided length [{a.size}] is not equal to (Ntau+1)*(Ndelta+1) = {(Ntau + 1) * (Ndelta + 1)}"
        )
    return [
        Chebyshev2DEOSTerm(
            a=a.reshape((Ntau + 1, Ndelta + 1), order="F"),  # tau index runs fastest
            taumin=float(term["taumin"]),
            taumax=float(term["taumax"]),
            deltamin=float(term["deltamin"]),
            deltamax=float(term["deltamax"]),
        )
    ]


@register("departure", "none")
def _build_none(term: Dict[str, Any]) -> List[Any]:
    return [NullEOSTerm()]


def build_departure_function(j: Dict[str, Any]) -> DepartureTerms:
    check_type("departure", j.get("type"))
    dep = DepartureTerms()
    for kind in build("departure", j):
        dep.add_term(kind)
    return dep


def get_departure_json(name: str, collection: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Departure document by ``Name``, falling back to its ``aliases``."""
    for el in collection:
        if el.get("Name") == name:
            return el
    for el in collection:
        if name in el.get("aliases", []):
            return el
    raise MissingDepartureFunction(f"Could not match the name: {name} when looking up departure function")


def get_departure_function_matrix(
    depcollection: Sequence[Dict[str, Any]],
    BIPcollection: Sequence[Dict[str, Any]],
    identifiers: Sequence[str],
    flags: Optional[Dict[str, Any]] = None,
) -> Tuple[List[List[DepartureTerms]], Dict[str, Dict[str, Any]]]:
    """NxN departure containers plus per-pair metadata.

    Each unordered pair is built once and the same container is installed at
    ``[i][j]`` and ``[j][i]``; the diagonal stays empty.
    """
    N = len(identifiers)
    funcs = [[DepartureTerms() for _ in range(N)] for _ in range(N)]
    meta: Dict[str, Dict[str, Any]] = {}
    for i in range(N):
        for j in range(i + 1, N):
            BIP, swap_needed = get_BIPdep(BIPcollection, (identifiers[i], identifiers[j]), flags)
            funcname = BIP.get("function", "")
            jj: Optional[Dict[str, Any]] = None
            if funcname:
                jj = get_departure_json(funcname, depcollection)
                dep = build_departure_function(jj)
                logger.debug("Departure %s for pair %s/%s: %r", funcname, identifiers[i], identifiers[j], dep)
            else:
                dep = DepartureTerms([NullEOSTerm()])
            funcs[i][j] = funcs[j][i] = dep
            BIP["swap_needed"] = swap_needed
            meta.setdefault(str(i), {})[str(j)] = {"departure": jj, "BIP": BIP}
    return funcs, meta
