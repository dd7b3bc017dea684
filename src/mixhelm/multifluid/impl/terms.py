r"""Analytic term kinds of a residual Helmholtz energy expansion.

Each kind is an immutable bundle of equal-length coefficient arrays with one
method, ``alphar(tau, delta, xp=None)``, returning its contribution to
:math:`\alpha^r(\tau, \delta)`.  Kinds only use arithmetic operators and the
``xp`` namespace (see :mod:`..utils.numerics`), so the same definitions give
plain values, complex-step values and jax forward-mode derivatives.

Poles: kinds with negative density exponents ``d`` are singular at
:math:`\delta = 0`; :class:`NonAnalyticEOSTerm` has non-smooth derivatives at
:math:`\delta = 1`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from ..utils.numerics import generic


@dataclass(frozen=True, eq=False)
class JustPowerEOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i}`"""

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        return xp.sum(self.n * tau ** self.t * delta ** self.d)


@dataclass(frozen=True, eq=False)
class PowerEOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(-c_i \delta^{l_i})`

    ``l`` holds integers; ``c_i`` is 1 where ``l_i > 0`` and 0 otherwise.
    """

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    c: np.ndarray
    l: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(-self.c * delta ** self.l))


@dataclass(frozen=True, eq=False)
class ExponentialEOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(-g_i \delta^{l_i})`"""

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    g: np.ndarray
    l: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(-self.g * delta ** self.l))


@dataclass(frozen=True, eq=False)
class Lemmon2005EOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(-\delta^{l_i}) \exp(-\tau^{m_i})`

    The density (temperature) damping factor is omitted where ``l_i == 0``
    (``m_i == 0``).
    """

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    m: np.ndarray
    l: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        lmask = np.where(self.l != 0, 1.0, 0.0)
        mmask = np.where(self.m != 0, 1.0, 0.0)
        damping = lmask * delta ** self.l + mmask * tau ** self.m
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(-damping))


@dataclass(frozen=True, eq=False)
class GaussianEOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(-\eta_i(\delta-\varepsilon_i)^2 - \beta_i(\tau-\gamma_i)^2)`"""

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    eta: np.ndarray
    beta: np.ndarray
    gamma: np.ndarray
    epsilon: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        bell = -self.eta * (delta - self.epsilon) ** 2 - self.beta * (tau - self.gamma) ** 2
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(bell))


@dataclass(frozen=True, eq=False)
class GERG2004EOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(-\eta_i(\delta-\varepsilon_i)^2 - \beta_i(\delta-\gamma_i))`

    Used by the GERG-2004/2008 departure functions.
    """

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    eta: np.ndarray
    beta: np.ndarray
    gamma: np.ndarray
    epsilon: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        arg = -self.eta * (delta - self.epsilon) ** 2 - self.beta * (delta - self.gamma)
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(arg))


@dataclass(frozen=True, eq=False)
class GaoBEOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(\eta_i(\delta-\varepsilon_i)^2 + 1/(\beta_i(\tau-\gamma_i)^2 + b_i))`

    ``eta`` is stored with the sign already flipped relative to the document.
    """

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    eta: np.ndarray
    beta: np.ndarray
    gamma: np.ndarray
    epsilon: np.ndarray
    b: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        arg = self.eta * (delta - self.epsilon) ** 2 + 1.0 / (self.beta * (tau - self.gamma) ** 2 + self.b)
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(arg))


@dataclass(frozen=True, eq=False)
class NonAnalyticEOSTerm:
    r"""Critical-region term of IAPWS-95 form, :math:`\sum_i n_i \Delta^{b_i} \delta \psi`.

    .. math::

        \theta = (1-\tau) + A_i((\delta-1)^2)^{1/(2\beta_i)}, \quad
        \Delta = \theta^2 + B_i((\delta-1)^2)^{a_i}, \quad
        \psi = \exp(-C_i(\delta-1)^2 - D_i(\tau-1)^2)
    """

    n: np.ndarray
    A: np.ndarray
    B: np.ndarray
    C: np.ndarray
    D: np.ndarray
    a: np.ndarray
    b: np.ndarray
    beta: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        dm1sq = (delta - 1.0) ** 2
        theta = (1.0 - tau) + self.A * dm1sq ** (1.0 / (2.0 * self.beta))
        Delta = theta ** 2 + self.B * dm1sq ** self.a
        psi = xp.exp(-self.C * dm1sq - self.D * (tau - 1.0) ** 2)
        return xp.sum(self.n * Delta ** self.b * delta * psi)


@dataclass(frozen=True, eq=False)
class DoubleExponentialEOSTerm:
    r""":math:`\sum_i n_i \tau^{t_i} \delta^{d_i} \exp(-g_{d,i} \delta^{l_{d,i}} - g_{t,i} \tau^{l_{t,i}})`"""

    n: np.ndarray
    t: np.ndarray
    d: np.ndarray
    ld: np.ndarray
    gd: np.ndarray
    lt: np.ndarray
    gt: np.ndarray

    @generic
    def alphar(self, tau, delta, xp):
        arg = -self.gd * delta ** self.ld - self.gt * tau ** self.lt
        return xp.sum(self.n * tau ** self.t * delta ** self.d * xp.exp(arg))


@dataclass(frozen=True, eq=False)
class Chebyshev2DEOSTerm:
    r"""Two-dimensional Chebyshev surface :math:`\sum_{ij} a_{ij} T_i(x) T_j(y)`.

    ``x`` and ``y`` map ``tau`` and ``delta`` linearly from the declared
    validity rectangle onto ``[-1, 1]``.  Outside the rectangle the series is
    still evaluated, with no accuracy guarantee.
    """

    a: np.ndarray  # shape (Ntau+1, Ndelta+1)
    taumin: float
    taumax: float
    deltamin: float
    deltamax: float

    @staticmethod
    def _clenshaw(coeffs, x):
        b1 = 0.0
        b2 = 0.0
        for c in reversed(coeffs[1:]):
            b1, b2 = 2.0 * x * b1 - b2 + c, b1
        return x * b1 - b2 + coeffs[0]

    @generic
    def alphar(self, tau, delta, xp):
        x = (2.0 * tau - (self.taumax + self.taumin)) / (self.taumax - self.taumin)
        y = (2.0 * delta - (self.deltamax + self.deltamin)) / (self.deltamax - self.deltamin)
        rows = [self._clenshaw(self.a[i, :], y) for i in range(self.a.shape[0])]
        return self._clenshaw(rows, x)


@dataclass(frozen=True, eq=False)
class NullEOSTerm:
    """Zero contribution; stands in for pairs without a departure function."""

    @generic
    def alphar(self, tau, delta, xp):
        return 0.0


class EOSTerms:
    """Ordered collection of term kinds forming one residual expansion.

    One instance holds a pure fluid's EOS or one departure function.  The
    container never looks inside its terms; evaluation is a plain sum, so an
    empty container contributes zero.
    """

    def __init__(self, terms: Iterable = ()):
        self._terms: List = list(terms)
        self._frozen = False

    def add_term(self, term) -> None:
        if self._frozen:
            raise TypeError(f"{self!r} belongs to a built model and is read-only")
        self._terms.append(term)

    def freeze(self) -> "EOSTerms":
        """Make the container and the coefficient arrays of its terms read-only; returns ``self``."""
        for term in self._terms:
            for field in fields(term):
                value = getattr(term, field.name)
                if isinstance(value, np.ndarray):
                    value.setflags(write=False)
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def terms(self) -> Tuple:
        return tuple(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator:
        return iter(self._terms)

    def __repr__(self) -> str:
        kinds = ", ".join(type(term).__name__ for term in self._terms)
        return f"EOSTerms([{kinds}])"

    @generic
    def alphar(self, tau, delta, xp):
        total = 0.0
        for term in self._terms:
            total = total + term.alphar(tau, delta, xp)
        return total


# Departure functions use the same container.
DepartureTerms = EOSTerms
