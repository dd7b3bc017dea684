r"""Multi-fluid mixture model.

.. math::

    \alpha^r(T, \rho, x) = \sum_i x_i \alpha^r_{0i}(\tau, \delta)
        + \sum_{i<j} x_i x_j F_{ij} \alpha^r_{ij}(\tau, \delta),
    \qquad \tau = T_r(x)/T, \quad \delta = \rho/\rho_r(x)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from mixhelm.common.exceptions import ArityMismatch, IndexOutOfRange

from ..utils.numerics import get_namespace
from ..utils.units import get_R_gas
from .builders import get_EOSs
from .departure import get_departure_function_matrix
from .identifiers import build_alias_map, collect_identifiers, select_identifier
from .reducing import MultiFluidReducingFunction, get_BIP_matrices, get_F_matrix, get_Tcvc
from .terms import DepartureTerms, EOSTerms

logger = logging.getLogger(__name__)


class CorrespondingStatesContribution:
    """Mole-fraction weighted sum of the pure-fluid residual expansions."""

    def __init__(self, EOSs: Sequence[EOSTerms]):
        self._EOSs = tuple(EOS.freeze() for EOS in EOSs)

    def size(self) -> int:
        return len(self._EOSs)

    def alphar(self, tau, delta, molefracs):
        total = 0.0
        for i in range(len(molefracs)):
            total = total + molefracs[i] * self._EOSs[i].alphar(tau, delta)
        return total

    def alphari(self, tau, delta, i: int):
        return self._EOSs[i].alphar(tau, delta)

    def get_EOS(self, i: int) -> EOSTerms:
        return self._EOSs[i]


class DepartureContribution:
    """Pairwise departure sum weighted by ``x_i x_j F_ij``."""

    def __init__(self, F: np.ndarray, funcs: Sequence[Sequence[DepartureTerms]]):
        self.F = np.array(F, dtype=float)
        self.F.setflags(write=False)
        self._funcs = tuple(tuple(dep.freeze() for dep in row) for row in funcs)

    def alphar(self, tau, delta, molefracs):
        total = 0.0
        N = len(molefracs)
        for i in range(N):
            for j in range(i + 1, N):
                total = total + molefracs[i] * molefracs[j] * self.F[i, j] * self._funcs[i][j].alphar(tau, delta)
        return total

    def _check_index(self, i: int, j: int) -> None:
        N = len(self._funcs)
        if i < 0 or j < 0:
            raise IndexOutOfRange("i or j is negative")
        if i >= N or j >= N:
            raise IndexOutOfRange(f"i or j is invalid; size is {N}")

    def get_alpharij(self, i: int, j: int, tau, delta):
        """Unweighted departure function of pair ``(i, j)``."""
        self._check_index(i, j)
        return self._funcs[i][j].alphar(tau, delta)

    def get_departure(self, i: int, j: int) -> DepartureTerms:
        self._check_index(i, j)
        return self._funcs[i][j]


class MultiFluid:
    """Corresponding-states mixture model; read-only once constructed."""

    def __init__(
        self,
        redfunc: MultiFluidReducingFunction,
        corr: CorrespondingStatesContribution,
        dep: DepartureContribution,
    ):
        self.redfunc = redfunc
        self.corr = corr
        self.dep = dep
        self._meta = ""

    def R(self, molefrac=None) -> float:
        return get_R_gas()

    def set_meta(self, meta: str) -> None:
        self._meta = meta

    def get_meta(self) -> str:
        return self._meta

    def get_tau_delta(self, T, rho, molefrac):
        return self.redfunc.get_Tr(molefrac) / T, rho / self.redfunc.get_rhor(molefrac)

    def alphar(self, T, rho, molefrac):
        if len(molefrac) != self.corr.size():
            raise ArityMismatch(
                f"Wrong size of mole fractions; {self.corr.size()} are loaded but {len(molefrac)} were provided"
            )
        xp = get_namespace(T, rho, molefrac)
        x = xp.asarray(molefrac)
        tau, delta = self.get_tau_delta(T, rho, x)
        return self.corr.alphar(tau, delta, x) + self.dep.alphar(tau, delta, x)

    def alphar_rhovec(self, T, rhovec):
        """``alphar`` from molar concentrations; ``rho`` is their sum."""
        xp = get_namespace(T, rhovec)
        rhovec = xp.asarray(rhovec)
        rhotot = xp.sum(rhovec)
        return self.alphar(T, rhotot, rhovec / rhotot)


def _build_multifluid_model(
    pure_json: Sequence[Dict[str, Any]],
    BIPcollection: Sequence[Dict[str, Any]],
    depcollection: Sequence[Dict[str, Any]],
    flags: Optional[Dict[str, Any]] = None,
) -> MultiFluid:
    """Assemble a model from already-loaded documents."""
    pure_json = list(pure_json)
    # Two components claiming one alias make by-name lookups ambiguous
    build_alias_map(pure_json)

    Tc, vc = get_Tcvc(pure_json)
    EOSs = get_EOSs(pure_json)

    identifierset = collect_identifiers(pure_json)
    identifiers: List[str] = identifierset[select_identifier(BIPcollection, identifierset, flags)]

    F = get_F_matrix(BIPcollection, identifiers, flags)
    funcs, funcsmeta = get_departure_function_matrix(depcollection, BIPcollection, identifiers, flags)
    betaT, gammaT, betaV, gammaV = get_BIP_matrices(BIPcollection, identifiers, flags, Tc, vc)

    model = MultiFluid(
        MultiFluidReducingFunction(betaT, gammaT, betaV, gammaV, Tc, vc),
        CorrespondingStatesContribution(EOSs),
        DepartureContribution(F, funcs),
    )
    model.set_meta(json.dumps({"pures": pure_json, "mix": funcsmeta}, indent=1))
    logger.debug("Built multi-fluid model for %s", identifiers)
    return model
