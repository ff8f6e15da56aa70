"""Zero-fallback division used by every coefficient in the engine.

A zero, missing or non-finite denominator yields 0, never NaN or Inf. The
IO tables routinely contain empty sectors, so this is the policy for all
coefficient derivation; it lives here so it can be tested in one place.
"""

import numpy as np


def safe_divide(
    numerator: float | np.ndarray,
    denominator: float | np.ndarray,
    fallback: float = 0.0,
) -> float | np.ndarray:
    """Element-wise ``numerator / denominator`` with non-finite results replaced.

    Accepts scalars or numpy arrays (broadcasting as numpy does). Returns a
    Python float for scalar inputs, otherwise a float64 array.

    Args:
        numerator: Scalar or array.
        denominator: Scalar or array.
        fallback: Value substituted where the quotient is not finite.
    """
    num = np.asarray(numerator, dtype=np.float64)
    den = np.asarray(denominator, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.divide(num, den)
    out = np.where(np.isfinite(out) & (den != 0), out, fallback)
    if out.ndim == 0:
        return float(out)
    return out


def finite_or(values: np.ndarray, fallback: float) -> np.ndarray:
    """Replace NaN/Inf entries of ``values`` with ``fallback``."""
    values = np.asarray(values, dtype=np.float64)
    return np.where(np.isfinite(values), values, fallback)
