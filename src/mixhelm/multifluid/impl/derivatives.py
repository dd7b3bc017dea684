r"""Derivatives of a model's residual Helmholtz energy.

The reduced derivatives are

.. math::

    A^r_{nm} = \tau^n \delta^m \frac{\partial^{n+m} \alpha^r}{\partial \tau^n \partial \delta^m}

and since :math:`\tau \propto 1/T` and :math:`\delta \propto \rho` at fixed
composition they are taken in the variables :math:`(1/T, \rho)`.  Nested
``jax.jacfwd`` gives them exactly; the ``_csd`` variants use complex-step
differentiation on plain numpy arithmetic instead.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

import jax
import jax.numpy as jnp
import numpy as np

H_CSD = 1e-100


def _as_jax(molefrac: Sequence[float]):
    return jnp.asarray(np.asarray(molefrac, dtype=float))


def _nested(f: Callable, NT: int, ND: int) -> Callable:
    g = f
    for _ in range(NT):
        g = jax.jacfwd(g, argnums=0)
    for _ in range(ND):
        g = jax.jacfwd(g, argnums=1)
    return g


def get_Arxy(model, NT: int, ND: int, T: float, rho: float, molefrac: Sequence[float]) -> float:
    if NT < 0 or ND < 0:
        raise ValueError(f"Derivative orders must be non-negative; got NT={NT}, ND={ND}")
    x = _as_jax(molefrac)

    def f(Trecip, rho_):
        return model.alphar(1.0 / Trecip, rho_, x)

    Trecip = 1.0 / T
    val = _nested(f, NT, ND)(jnp.asarray(Trecip, dtype=float), jnp.asarray(rho, dtype=float))
    return float(Trecip ** NT * rho ** ND * val)


def get_Ar00(model, T, rho, molefrac):
    return get_Arxy(model, 0, 0, T, rho, molefrac)


def get_Ar10(model, T, rho, molefrac):
    return get_Arxy(model, 1, 0, T, rho, molefrac)


def get_Ar01(model, T, rho, molefrac):
    return get_Arxy(model, 0, 1, T, rho, molefrac)


def get_Ar11(model, T, rho, molefrac):
    return get_Arxy(model, 1, 1, T, rho, molefrac)


def get_Ar20(model, T, rho, molefrac):
    return get_Arxy(model, 2, 0, T, rho, molefrac)


def get_Ar02(model, T, rho, molefrac):
    return get_Arxy(model, 0, 2, T, rho, molefrac)


def get_Ar0n(model, T: float, rho: float, molefrac: Sequence[float], n: int) -> List[float]:
    """``[Ar00, Ar01, ..., Ar0n]``."""
    return [get_Arxy(model, 0, m, T, rho, molefrac) for m in range(n + 1)]


def get_Ar01_csd(model, T: float, rho: float, molefrac: Sequence[float]) -> float:
    x = np.asarray(molefrac, dtype=float)
    val = model.alphar(T, complex(rho, H_CSD), x)
    return rho * np.imag(val) / H_CSD


def get_Ar10_csd(model, T: float, rho: float, molefrac: Sequence[float]) -> float:
    x = np.asarray(molefrac, dtype=float)
    Trecip = 1.0 / T
    val = model.alphar(1.0 / complex(Trecip, H_CSD), rho, x)
    return Trecip * np.imag(val) / H_CSD


def get_pr(model, T: float, rho: float, molefrac: Sequence[float]) -> float:
    """Residual pressure [Pa], ``rho R T Ar01``."""
    return rho * model.R(molefrac) * T * get_Ar01(model, T, rho, molefrac)


def get_B2vir(model, T: float, molefrac: Sequence[float]) -> float:
    """Second virial coefficient [m^3/mol], the density slope of ``alphar`` at zero density."""
    x = _as_jax(molefrac)
    dalphar_drho = jax.jacfwd(lambda rho_: model.alphar(T, rho_, x))
    return float(dalphar_drho(jnp.asarray(0.0)))
