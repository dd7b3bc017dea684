r"""Mixture reducing functions and binary interaction parameters.

The reducing temperature and volume follow the GERG-2008 form

.. math::

    Y_r(x) = \sum_i x_i^2 Y_{c,i}
        + \sum_{i<j} 2 x_i x_j \frac{x_i + x_j}{\beta_{ij}^2 x_i + x_j} \beta_{ij}\gamma_{ij} Y_{c,ij}

with :math:`T_{c,ij} = \sqrt{T_{c,i} T_{c,j}}` and
:math:`v_{c,ij} = (v_{c,i}^{1/3} + v_{c,j}^{1/3})^3 / 8`.  The matrices are
stored in full with :math:`\beta_{ji} = 1/\beta_{ij}`, so the order in which a
binary document names the pair is absorbed at build time.

A binary document entry looks like::

    {"Name1": "Methane", "Name2": "Ethane", "hash1": "74-82-8", "hash2": "74-84-0",
     "betaT": 0.99, "gammaT": 1.01, "betaV": 1.0, "gammaV": 1.0, "F": 1.0,
     "function": "Methane-Ethane"}

Lemmon-style entries may give ``xi`` and ``zeta`` instead of the four
``beta``/``gamma`` values.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from mixhelm.common.exceptions import MissingBinaryPair

logger = logging.getLogger(__name__)

ESTIMATION_SCHEMES = ("Lorentz-Berthelot", "linear")


def get_Tcvc(pure_json: Iterable[Dict[str, Any]]) -> Tuple[np.ndarray, np.ndarray]:
    """Critical temperatures [K] and molar volumes [m^3/mol] from the EOS reducing states."""
    Tc: List[float] = []
    vc: List[float] = []
    for j in pure_json:
        red = j["EOS"][0]["STATES"]["reducing"]
        Tc.append(float(red["T"]))
        vc.append(1.0 / float(red["rhomolar"]))
    return np.array(Tc), np.array(vc)


def estimate_BIP(scheme: str) -> Dict[str, Any]:
    if scheme == "Lorentz-Berthelot":
        return {"betaT": 1.0, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0, "F": 0.0, "estimated": scheme}
    if scheme == "linear":
        return {"betaT": 1.0, "betaV": 1.0, "xi": 0.0, "zeta": 0.0, "F": 0.0, "estimated": scheme}
    raise ValueError(f"Unknown estimation scheme '{scheme}'; options are {list(ESTIMATION_SCHEMES)}")


def _matches(el: Dict[str, Any], a: str, b: str) -> bool:
    if el.get("hash1") == a and el.get("hash2") == b:
        return True
    return el.get("Name1") == a and el.get("Name2") == b


def get_BIPdep(
    collection: Sequence[Dict[str, Any]],
    identifiers: Sequence[str],
    flags: Optional[Dict[str, Any]] = None,
) -> Tuple[Dict[str, Any], bool]:
    """Binary entry for a pair of identifiers and whether its order is swapped.

    Flags: ``estimate`` names a scheme used when nothing matches;
    ``force-estimate`` skips the lookup altogether.
    """
    flags = flags or {}
    a, b = identifiers
    if flags.get("force-estimate"):
        return estimate_BIP(flags.get("estimate", "Lorentz-Berthelot")), False
    for el in collection:
        if _matches(el, a, b):
            return dict(el), False
    for el in collection:
        if _matches(el, b, a):
            return dict(el), True
    if "estimate" in flags:
        return estimate_BIP(flags["estimate"]), False
    raise MissingBinaryPair(f"Can't match the binary pair for: {a}/{b}")


def get_BIP_matrices(
    collection: Sequence[Dict[str, Any]],
    identifiers: Sequence[str],
    flags: Optional[Dict[str, Any]],
    Tc: np.ndarray,
    vc: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    N = len(identifiers)
    betaT = np.ones((N, N))
    gammaT = np.ones((N, N))
    betaV = np.ones((N, N))
    gammaV = np.ones((N, N))
    for i in range(N):
        for j in range(i + 1, N):
            BIP, swap_needed = get_BIPdep(collection, (identifiers[i], identifiers[j]), flags)
            if "estimated" in BIP:
                logger.warning(
                    "No binary parameters for %s/%s; estimating with %s",
                    identifiers[i], identifiers[j], BIP["estimated"],
                )
            if "xi" in BIP and "zeta" in BIP:
                bT = bV = 1.0
                gT = (Tc[i] + Tc[j] + float(BIP["xi"])) / (2.0 * np.sqrt(Tc[i] * Tc[j]))
                gV = 4.0 * (vc[i] + vc[j] + float(BIP["zeta"])) / (np.cbrt(vc[i]) + np.cbrt(vc[j])) ** 3
            else:
                bT = float(BIP["betaT"])
                gT = float(BIP["gammaT"])
                bV = float(BIP["betaV"])
                gV = float(BIP["gammaV"])
                if swap_needed:
                    bT = 1.0 / bT
                    bV = 1.0 / bV
            betaT[i, j], betaT[j, i] = bT, 1.0 / bT
            betaV[i, j], betaV[j, i] = bV, 1.0 / bV
            gammaT[i, j] = gammaT[j, i] = gT
            gammaV[i, j] = gammaV[j, i] = gV
    return betaT, gammaT, betaV, gammaV


def get_F_matrix(
    collection: Sequence[Dict[str, Any]],
    identifiers: Sequence[str],
    flags: Optional[Dict[str, Any]] = None,
) -> np.ndarray:
    """Departure weights; 1 unless the binary entry gives ``F``."""
    N = len(identifiers)
    F = np.zeros((N, N))
    for i in range(N):
        for j in range(i + 1, N):
            BIP, _ = get_BIPdep(collection, (identifiers[i], identifiers[j]), flags)
            F[i, j] = F[j, i] = float(BIP.get("F", 1.0))
    return F


class MultiFluidReducingFunction:
    """GERG-2008 reducing temperature and density for an N-component mixture."""

    def __init__(self, betaT, gammaT, betaV, gammaV, Tc, vc):
        self.betaT = np.asarray(betaT, dtype=float)
        self.gammaT = np.asarray(gammaT, dtype=float)
        self.betaV = np.asarray(betaV, dtype=float)
        self.gammaV = np.asarray(gammaV, dtype=float)
        self.Tc = np.asarray(Tc, dtype=float)
        self.vc = np.asarray(vc, dtype=float)

        Tc_ij = np.sqrt(np.outer(self.Tc, self.Tc))
        cbrt_vc = np.cbrt(self.vc)
        vc_ij = (cbrt_vc[:, None] + cbrt_vc[None, :]) ** 3 / 8.0
        self.YT = self.betaT * self.gammaT * Tc_ij
        self.Yv = self.betaV * self.gammaV * vc_ij

    @staticmethod
    def Y(z, Yc, beta, Yij):
        N = len(z)
        sum1 = 0.0
        for i in range(N):
            sum1 = sum1 + z[i] * z[i] * Yc[i]
        sum2 = 0.0
        for i in range(N - 1):
            for j in range(i + 1, N):
                den = z[i] * beta[i, j] ** 2 + z[j]
                if den != 0:
                    sum2 = sum2 + 2.0 * z[i] * z[j] * (z[i] + z[j]) / den * Yij[i, j]
        return sum1 + sum2

    def get_Tr(self, molefracs):
        return self.Y(molefracs, self.Tc, self.betaT, self.YT)

    def get_rhor(self, molefracs):
        return 1.0 / self.Y(molefracs, self.vc, self.betaV, self.Yv)
