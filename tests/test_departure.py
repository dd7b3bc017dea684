import math

import pytest

from mixhelm.common.exceptions import MissingDepartureFunction, OrderingViolation, ShapeMismatch, UnknownTermType
from mixhelm.multifluid.impl import departure
from mixhelm.multifluid.impl.terms import (
    Chebyshev2DEOSTerm,
    GaussianEOSTerm,
    GERG2004EOSTerm,
    JustPowerEOSTerm,
    NullEOSTerm,
    PowerEOSTerm,
)


def gerg_doc(name="A-B", kind="GERG-2008", **extra):
    doc = {
        "Name": name,
        "aliases": [name + " alias"],
        "type": kind,
        "Npower": 1,
        "n": [0.5, 0.25],
        "t": [1.0, 2.0],
        "d": [1.0, 2.0],
        "eta": [0.0, 1.0],
        "beta": [0.0, 1.0],
        "gamma": [0.0, 0.5],
        "epsilon": [0.0, 0.5],
    }
    doc.update(extra)
    return doc


def bip(name1, name2, function="", **extra):
    entry = {"Name1": name1, "Name2": name2, "betaT": 1.0, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0,
             "function": function}
    entry.update(extra)
    return entry


def test_gerg_splits_on_npower():
    dep = departure.build_departure_function(gerg_doc())
    kinds = dep.terms
    assert isinstance(kinds[0], JustPowerEOSTerm)
    assert isinstance(kinds[1], GERG2004EOSTerm)

    tau, delta = 1.2, 0.8
    expected = 0.5 * tau * delta + 0.25 * tau ** 2 * delta ** 2 * math.exp(-(delta - 0.5) ** 2 - (delta - 0.5))
    assert abs(dep.alphar(tau, delta) - expected) < 1e-14


def test_gerg_power_head_with_damping():
    doc = gerg_doc(Npower=2, n=[0.5, 0.1, 0.25], t=[1.0, 1.0, 2.0], d=[1.0, 1.0, 2.0], l=[0, 1, 0],
                   eta=[0.0, 0.0, 1.0], beta=[0.0, 0.0, 1.0], gamma=[0.0, 0.0, 0.5], epsilon=[0.0, 0.0, 0.5])
    kinds = departure.build_departure_function(doc).terms
    assert [type(k) for k in kinds] == [JustPowerEOSTerm, PowerEOSTerm, GERG2004EOSTerm]


def test_gaussian_exponential_tail_is_gaussian():
    dep = departure.build_departure_function(gerg_doc(kind="Gaussian+Exponential"))
    assert isinstance(dep.terms[-1], GaussianEOSTerm)
    tau, delta = 1.2, 0.8
    expected = 0.5 * tau * delta + 0.25 * tau ** 2 * delta ** 2 * math.exp(-(delta - 0.5) ** 2 - (tau - 0.5) ** 2)
    assert abs(dep.alphar(tau, delta) - expected) < 1e-14


def test_gerg_length_mismatch():
    with pytest.raises(ShapeMismatch):
        departure.build_departure_function(gerg_doc(gamma=[0.0]))


def test_exponential_departure_ordering_is_validated():
    with pytest.raises(OrderingViolation):
        departure.build_departure_function({"type": "Exponential", "n": [1.0, 1.0], "t": [1.0, 1.0],
                                            "d": [1.0, 1.0], "l": [1, 0]})


def test_empty_exponential_departure_adds_nothing():
    dep = departure.build_departure_function({"type": "Exponential", "n": [], "t": [], "d": [], "l": []})
    assert len(dep) == 0
    assert dep.alphar(1.0, 1.0) == 0.0


def test_none_departure_is_null():
    dep = departure.build_departure_function({"type": "none"})
    assert isinstance(dep.terms[0], NullEOSTerm)
    assert dep.alphar(1.3, 0.2) == 0.0


def test_chebyshev_departure():
    doc = {"type": "Chebyshev2D", "Ntau": 1, "Ndelta": 1, "a": [1.0, 2.0, 3.0, 4.0],
           "taumin": 0.0, "taumax": 2.0, "deltamin": 0.0, "deltamax": 2.0}
    dep = departure.build_departure_function(doc)
    term = dep.terms[0]
    assert isinstance(term, Chebyshev2DEOSTerm)
    # Coefficients run fastest in tau
    assert term.a[1, 0] == 2.0
    assert term.a[0, 1] == 3.0
    assert abs(dep.alphar(1.5, 0.5) + 0.5) < 1e-14

    with pytest.raises(ShapeMismatch):
        departure.build_departure_function(dict(doc, a=[1.0, 2.0, 3.0]))


def test_unknown_departure_type():
    with pytest.raises(UnknownTermType) as excinfo:
        departure.build_departure_function({"type": "GERG-2012"})
    assert "GERG-2008" in str(excinfo.value)


def test_departure_lookup_by_name_then_alias():
    collection = [gerg_doc("A-B"), gerg_doc("C-D")]
    assert departure.get_departure_json("C-D", collection)["Name"] == "C-D"
    assert departure.get_departure_json("A-B alias", collection)["Name"] == "A-B"
    with pytest.raises(MissingDepartureFunction):
        departure.get_departure_json("E-F", collection)


def test_departure_matrix_shares_pair_container():
    deps = [gerg_doc("A-B")]
    BIPs = [bip("A", "B", "A-B"), bip("C", "A"), bip("B", "C")]
    funcs, meta = departure.get_departure_function_matrix(deps, BIPs, ["A", "B", "C"], {})

    assert funcs[0][1] is funcs[1][0]
    assert len(funcs[0][1]) == 2
    for i in range(3):
        assert len(funcs[i][i]) == 0
    assert isinstance(funcs[0][2].terms[0], NullEOSTerm)
    assert funcs[1][2].alphar(1.0, 1.0) == 0.0

    assert meta["0"]["1"]["departure"]["Name"] == "A-B"
    assert meta["0"]["1"]["BIP"]["swap_needed"] is False
    assert meta["0"]["2"]["BIP"]["swap_needed"] is True
    assert meta["0"]["2"]["departure"] is None
