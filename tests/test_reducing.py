import math

import numpy as np
import pytest

from mixhelm.common.exceptions import MissingBinaryPair
from mixhelm.multifluid.impl import reducing


def pure(Tc, rhoc):
    return {"EOS": [{"STATES": {"reducing": {"T": Tc, "rhomolar": rhoc}}, "alphar": []}]}


def test_critical_parameters_from_reducing_state():
    Tc, vc = reducing.get_Tcvc([pure(100.0, 1000.0), pure(400.0, 250.0)])
    assert list(Tc) == [100.0, 400.0]
    assert list(vc) == [1e-3, 4e-3]


def test_bip_lookup_direct_swapped_and_by_hash():
    collection = [
        {"Name1": "A", "Name2": "B", "betaT": 1.1, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0},
        {"hash1": "74-82-8", "hash2": "74-84-0", "betaT": 0.9, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0},
    ]
    BIP, swapped = reducing.get_BIPdep(collection, ("A", "B"))
    assert BIP["betaT"] == 1.1 and swapped is False
    BIP, swapped = reducing.get_BIPdep(collection, ("B", "A"))
    assert BIP["betaT"] == 1.1 and swapped is True
    BIP, swapped = reducing.get_BIPdep(collection, ("74-84-0", "74-82-8"))
    assert BIP["betaT"] == 0.9 and swapped is True
    with pytest.raises(MissingBinaryPair):
        reducing.get_BIPdep(collection, ("A", "C"))


def test_bip_estimation_flags():
    collection = [{"Name1": "A", "Name2": "B", "betaT": 1.1, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0}]
    BIP, _ = reducing.get_BIPdep(collection, ("A", "C"), {"estimate": "Lorentz-Berthelot"})
    assert BIP["betaT"] == 1.0 and BIP["F"] == 0.0
    BIP, _ = reducing.get_BIPdep(collection, ("A", "B"), {"force-estimate": True, "estimate": "linear"})
    assert BIP["xi"] == 0.0 and BIP["zeta"] == 0.0
    with pytest.raises(ValueError):
        reducing.get_BIPdep(collection, ("A", "C"), {"estimate": "guess"})


def test_bip_matrices_invert_betas_when_swapped():
    collection = [{"Name1": "B", "Name2": "A", "betaT": 2.0, "gammaT": 1.5, "betaV": 4.0, "gammaV": 0.5}]
    Tc = np.array([100.0, 400.0])
    vc = np.array([1e-3, 4e-3])
    betaT, gammaT, betaV, gammaV = reducing.get_BIP_matrices(collection, ["A", "B"], {}, Tc, vc)
    assert betaT[0, 1] == 0.5 and betaT[1, 0] == 2.0
    assert betaV[0, 1] == 0.25 and betaV[1, 0] == 4.0
    assert gammaT[0, 1] == gammaT[1, 0] == 1.5
    assert gammaV[0, 1] == gammaV[1, 0] == 0.5


def test_bip_matrices_from_xi_zeta():
    collection = [{"Name1": "A", "Name2": "B", "xi": 10.0, "zeta": 1e-4}]
    Tc = np.array([100.0, 400.0])
    vc = np.array([1e-3, 8e-3])
    betaT, gammaT, betaV, gammaV = reducing.get_BIP_matrices(collection, ["A", "B"], {}, Tc, vc)
    assert betaT[0, 1] == 1.0 and betaV[0, 1] == 1.0
    assert abs(gammaT[0, 1] - 510.0 / 400.0) < 1e-14
    expected_gV = 4.0 * (1e-3 + 8e-3 + 1e-4) / (0.1 + 0.2) ** 3
    assert abs(gammaV[0, 1] - expected_gV) < 1e-12


def test_F_matrix_defaults_to_one():
    collection = [
        {"Name1": "A", "Name2": "B", "betaT": 1.0, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0},
        {"Name1": "A", "Name2": "C", "betaT": 1.0, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0, "F": 0.25},
        {"Name1": "B", "Name2": "C", "betaT": 1.0, "gammaT": 1.0, "betaV": 1.0, "gammaV": 1.0, "F": 0.0},
    ]
    F = reducing.get_F_matrix(collection, ["A", "B", "C"])
    assert F[0, 1] == F[1, 0] == 1.0
    assert F[0, 2] == F[2, 0] == 0.25
    assert F[1, 2] == 0.0
    assert F[0, 0] == 0.0


def build_redfunc(betaT=1.0, gammaT=1.0, betaV=1.0, gammaV=1.0):
    def mat(v):
        return np.array([[1.0, v], [1.0 / v if v else 1.0, 1.0]])

    return reducing.MultiFluidReducingFunction(
        mat(betaT), np.array([[1.0, gammaT], [gammaT, 1.0]]),
        mat(betaV), np.array([[1.0, gammaV], [gammaV, 1.0]]),
        Tc=[100.0, 400.0], vc=[1e-3, 8e-3],
    )


def test_reducing_pure_limits():
    red = build_redfunc(betaT=1.2, gammaT=0.9, betaV=0.8, gammaV=1.1)
    assert abs(red.get_Tr([1.0, 0.0]) - 100.0) < 1e-12
    assert abs(red.get_rhor([0.0, 1.0]) - 125.0) < 1e-9


def test_reducing_equimolar_mixing_rule():
    red = build_redfunc()
    # 0.25*100 + 0.25*400 + 2*0.25*sqrt(100*400)
    assert abs(red.get_Tr([0.5, 0.5]) - 225.0) < 1e-12
    vc12 = (0.1 + 0.2) ** 3 / 8.0
    v = 0.25 * 1e-3 + 0.25 * 8e-3 + 0.5 * vc12
    assert abs(red.get_rhor([0.5, 0.5]) - 1.0 / v) < 1e-9


def test_reducing_asymmetric_beta():
    red = build_redfunc(betaT=1.2, gammaT=0.9)
    x = [0.3, 0.7]
    corr = 2 * 0.3 * 0.7 * (0.3 + 0.7) / (1.2 ** 2 * 0.3 + 0.7) * 1.2 * 0.9 * math.sqrt(100.0 * 400.0)
    expected = 0.09 * 100.0 + 0.49 * 400.0 + corr
    assert abs(red.get_Tr(x) - expected) < 1e-10


def test_zero_denominator_pair_is_skipped():
    red = build_redfunc()
    assert red.get_Tr([0.0, 0.0]) == 0.0
