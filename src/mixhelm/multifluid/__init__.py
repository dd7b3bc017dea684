"""Convenience exports for multi-fluid Helmholtz energy models."""

from .impl.derivatives import (
    get_Ar00,
    get_Ar01,
    get_Ar01_csd,
    get_Ar02,
    get_Ar0n,
    get_Ar10,
    get_Ar10_csd,
    get_Ar11,
    get_Ar20,
    get_Arxy,
    get_B2vir,
    get_pr,
)
from .impl.multifluid import MultiFluid
from .impl.terms import DepartureTerms, EOSTerms
from .interfaces import build_multifluid_model, load_multifluid_from_json, multifluid_factory

__all__ = [
    "DepartureTerms",
    "EOSTerms",
    "MultiFluid",
    "build_multifluid_model",
    "get_Ar00",
    "get_Ar01",
    "get_Ar01_csd",
    "get_Ar02",
    "get_Ar0n",
    "get_Ar10",
    "get_Ar10_csd",
    "get_Ar11",
    "get_Ar20",
    "get_Arxy",
    "get_B2vir",
    "get_pr",
    "load_multifluid_from_json",
    "multifluid_factory",
]
