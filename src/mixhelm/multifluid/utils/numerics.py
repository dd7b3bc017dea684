"""Numeric-representation plumbing shared by every term kind.

Term kinds are written once against an array namespace ``xp`` supplying
``exp``, ``log``, ``sqrt``, ``power`` and ``sum``.  The namespace is chosen at
the call site from the arguments themselves:

* jax arrays and tracers select :mod:`jax.numpy`, so ``jax.jacfwd`` yields
  exact derivatives by forward accumulation;
* anything else (``float``, ``complex``, numpy arrays) selects :mod:`numpy`,
  which also carries complex-step differentiation.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

import jax
import jax.numpy as jnp
import numpy as np

# Derivatives are compared against double-precision references.
jax.config.update("jax_enable_x64", True)


def _is_jax(value: Any) -> bool:
    if isinstance(value, jax.Array):
        return True
    if isinstance(value, (list, tuple)):
        return any(isinstance(v, jax.Array) for v in value)
    return False


def get_namespace(*values: Any):
    """Return ``jax.numpy`` if any argument is a jax value, else ``numpy``."""
    if any(_is_jax(v) for v in values):
        return jnp
    return np


def generic(fn: Callable) -> Callable:
    """Wrapper for ``alphar(self, tau, delta, xp=None)`` methods that fills ``xp``."""

    @functools.wraps(fn)
    def wrapped(self, tau, delta, xp=None):
        if xp is None:
            xp = get_namespace(tau, delta)
        return fn(self, tau, delta, xp)

    return wrapped
