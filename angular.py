import math

import numpy as np
import numexpr as ne


def angularDistance(ra1, dec1, ra2, dec2):
    """
    Great-circle central angle between two points on the sphere
    ra1, dec1   first point (degrees)
    ra2, dec2   second point (degrees)
    returns     separation in degrees, in [0, 180]
    """
    if not all(map(math.isfinite, (ra1, dec1, ra2, dec2))):
        raise ValueError(f"non-finite coordinates: ({ra1}, {dec1}), ({ra2}, {dec2})")
    d1 = math.radians(dec1)
    d2 = math.radians(dec2)
    # abs() keeps the result exactly symmetric in the two points
    dra = math.radians(abs(ra1 - ra2))
    c = math.sin(d1) * math.sin(d2) + math.cos(d1) * math.cos(d2) * math.cos(dra)
    return math.degrees(math.acos(min(1.0, max(-1.0, c))))


def angularDistance_numpy(ra1, dec1, ra2, dec2):
    """
    Vectorized angularDistance over broadcastable arrays (degrees in, degrees out).
    """
    d1 = np.radians(dec1)
    d2 = np.radians(dec2)
    dra = np.radians(np.abs(np.subtract(ra1, ra2)))
    c = np.sin(d1) * np.sin(d2) + np.cos(d1) * np.cos(d2) * np.cos(dra)
    return np.degrees(np.arccos(np.clip(c, -1.0, 1.0)))


def angularDistance_numexpr(ra1, dec1, ra2, dec2):
    """
    angularDistance evaluated with NumExpr, for large M x N blocks.
    ra1, dec1 should be shaped (M, 1) and ra2, dec2 (1, N).
    """
    deg = np.pi / 180.0
    d1 = np.asarray(dec1, dtype=np.float64) * deg
    d2 = np.asarray(dec2, dtype=np.float64) * deg
    a1 = np.asarray(ra1, dtype=np.float64) * deg
    a2 = np.asarray(ra2, dtype=np.float64) * deg
    c = ne.evaluate("sin(d1) * sin(d2) + cos(d1) * cos(d2) * cos(abs(a1 - a2))")
    np.clip(c, -1.0, 1.0, out=c)
    return ne.evaluate("arccos(c)") / deg
