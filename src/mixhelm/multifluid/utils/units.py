R_GAS = 8.31446261815324  # J·mol^-1·K^-1 (CODATA 2018, exact)


def get_R_gas() -> float:
    """Molar gas constant used for every component of a multi-fluid model."""
    return R_GAS
