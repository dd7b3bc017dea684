"""Build validated term containers from pure-fluid EOS documents.

A pure-fluid document follows the usual fluid-file layout::

    {"INFO": {...},
     "EOS": [{"STATES": {"reducing": {"T": ..., "rhomolar": ...}},
              "alphar": [{"type": "ResidualHelmholtzPower", "n": [...], ...}, ...]}]}

Every ``alphar`` entry is dispatched on its ``type`` through the registry.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Sequence

import numpy as np

from mixhelm.common.exceptions import NonIntegerExponent, OrderingViolation, ShapeMismatch

from .registry import build, check_type, register
from .terms import (
    DoubleExponentialEOSTerm,
    EOSTerms,
    ExponentialEOSTerm,
    GaoBEOSTerm,
    GaussianEOSTerm,
    JustPowerEOSTerm,
    Lemmon2005EOSTerm,
    NonAnalyticEOSTerm,
    PowerEOSTerm,
)

logger = logging.getLogger(__name__)


def _array(term: Dict[str, Any], key: str, what: str) -> np.ndarray:
    if key not in term:
        raise KeyError(f"Missing '{key}' in {what} term")
    return np.asarray(term[key], dtype=float)


def _array_or_zero(term: Dict[str, Any], key: str, N: int) -> np.ndarray:
    values = term.get(key)
    if values is None or len(values) == 0:
        return np.zeros(N)
    return np.asarray(values, dtype=float)


def require_same_length(arrays: Dict[str, np.ndarray], what: str) -> None:
    lengths = {k: len(v) for k, v in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise ShapeMismatch(f"Lengths are not all identical in {what} term: {lengths}")


def collect_arrays(term: Dict[str, Any], keys: Sequence[str], what: str) -> Dict[str, np.ndarray]:
    """Read the named coefficient arrays of ``term`` and check they share one length."""
    arrays = {k: _array(term, k, what) for k in keys}
    require_same_length(arrays, what)
    return arrays


def as_integers(values: np.ndarray, key: str, what: str) -> np.ndarray:
    as_int = values.astype(int)
    if np.any(np.abs(as_int - values) > 0.0):
        raise NonIntegerExponent(f"Non-integer entry in '{key}' of {what} term: {values.tolist()}")
    return as_int


def check_zero_prefix(l: np.ndarray, what: str) -> None:
    """Zero damping exponents, when mixed with nonzero ones, must come first."""
    nonzero = l != 0
    if not nonzero.any():
        return
    first = int(np.argmax(nonzero))
    if not nonzero[first:].all():
        raise OrderingViolation(
            f"If l_i has zero and non-zero values, the zero values need to come first; "
            f"got l = {l.tolist()} in {what} term"
        )


def build_power_terms(term: Dict[str, Any], what: str = "power") -> List[Any]:
    """Power-law terms with optional ``exp(-delta^l)`` damping.

    A contiguous zero prefix of ``l`` is split off into a
    :class:`JustPowerEOSTerm`, which skips the exponential entirely.
    """
    n = _array(term, "n", what)
    N = len(n)
    t = _array_or_zero(term, "t", N)
    d = _array_or_zero(term, "d", N)
    arrays = {"n": n, "t": t, "d": d}
    has_l = term.get("l") is not None and len(term["l"]) > 0
    l = _array_or_zero(term, "l", N)
    if has_l:
        arrays["l"] = l
    require_same_length(arrays, what)

    l_i = as_integers(l, "l", what)
    check_zero_prefix(l_i, what)
    c = np.where(l_i > 0, 1.0, 0.0)

    Nlzero = int(np.sum(l_i == 0))
    if Nlzero == N:
        logger.debug("%s term: all %d entries undamped, using plain power form", what, N)
        return [JustPowerEOSTerm(n=n, t=t, d=d)]
    if Nlzero > 0:
        logger.debug("%s term: splitting %d undamped + %d damped entries", what, Nlzero, N - Nlzero)
        return [
            JustPowerEOSTerm(n=n[:Nlzero], t=t[:Nlzero], d=d[:Nlzero]),
            PowerEOSTerm(n=n[Nlzero:], t=t[Nlzero:], d=d[Nlzero:], c=c[Nlzero:], l=l_i[Nlzero:]),
        ]
    return [PowerEOSTerm(n=n, t=t, d=d, c=c, l=l_i)]


@register("eos", "ResidualHelmholtzPower")
def _build_power(term: Dict[str, Any]) -> List[Any]:
    return build_power_terms(term, "ResidualHelmholtzPower")


@register("eos", "ResidualHelmholtzGaussian")
def _build_gaussian(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "eta", "beta", "gamma", "epsilon"], "Gaussian")
    return [GaussianEOSTerm(**arrays)]


@register("eos", "ResidualHelmholtzNonAnalytic")
def _build_nonanalytic(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "A", "B", "C", "D", "a", "b", "beta"], "nonanalytic")
    return [NonAnalyticEOSTerm(**arrays)]


@register("eos", "ResidualHelmholtzLemmon2005")
def _build_lemmon2005(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "m", "l"], "Lemmon2005")
    arrays["l"] = as_integers(arrays["l"], "l", "Lemmon2005")
    return [Lemmon2005EOSTerm(**arrays)]


@register("eos", "ResidualHelmholtzGaoB")
def _build_gaob(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "eta", "beta", "gamma", "epsilon", "b"], "GaoB")
    # Watch out for this sign flip
    arrays["eta"] = -arrays["eta"]
    return [GaoBEOSTerm(**arrays)]


@register("eos", "ResidualHelmholtzExponential")
def _build_exponential(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "g", "l"], "exponential")
    arrays["l"] = as_integers(arrays["l"], "l", "exponential")
    return [ExponentialEOSTerm(**arrays)]


@register("eos", "ResidualHelmholtzDoubleExponential")
def build_double_exponential(term: Dict[str, Any]) -> List[Any]:
    arrays = collect_arrays(term, ["n", "t", "d", "ld", "gd", "lt", "gt"], "double exponential")
    arrays["ld"] = as_integers(arrays["ld"], "ld", "double exponential")
    return [DoubleExponentialEOSTerm(**arrays)]


def get_EOS_terms(j: Dict[str, Any]) -> EOSTerms:
    """Term container for the first EOS of a pure-fluid document."""
    alphar = j["EOS"][0]["alphar"]

    # First check whether every term type is allowed
    for term in alphar:
        check_type("eos", term.get("type"))

    container = EOSTerms()
    for term in alphar:
        for kind in build("eos", term):
            container.add_term(kind)
    return container


def get_EOSs(pure_json: Iterable[Dict[str, Any]]) -> List[EOSTerms]:
    return [get_EOS_terms(j) for j in pure_json]
