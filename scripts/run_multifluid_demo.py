import logging

from mixhelm.multifluid import get_Ar01, get_Ar01_csd, get_Ar10, get_B2vir, get_pr, load_multifluid_from_json


def main():
    logging.basicConfig(level=logging.INFO)
    model = load_multifluid_from_json("data/multifluid/demo_mixture.json")
    # Example state: T=120 K, rho=5000 mol/m^3, equimolar N2/Ar
    T, rho, x = 120.0, 5000.0, [0.5, 0.5]
    print("[multifluid] alphar ->", float(model.alphar(T, rho, x)))
    print("[multifluid] Ar10 ->", get_Ar10(model, T, rho, x))
    print("[multifluid] Ar01 (jax) ->", get_Ar01(model, T, rho, x), " (complex step) ->", get_Ar01_csd(model, T, rho, x))
    print("[multifluid] p_r [Pa] ->", get_pr(model, T, rho, x))
    print("[multifluid] B2 [m^3/mol] ->", get_B2vir(model, T, x))


if __name__ == "__main__":
    main()
