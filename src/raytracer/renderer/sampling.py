# renderer/sampling.py
import random

import numpy as np
from numba import njit


@njit
def halton(index, base):
    """
    Compute the Halton sequence value for a given index and base.
    Deterministic, in [0, 1); index 0 maps to 0.
    """
    result = 0.0
    f = 1.0 / base
    i = index
    while i > 0:
        result += f * (i % base)
        i = i // base
        f /= base
    return result


@njit
def _fill_halton_table(table, base):
    for i in range(table.shape[0]):
        table[i] = halton(i, base)


def precompute_halton_tables(max_samples: int):
    """Tables for bases 2 and 3, indexed by sample number."""
    table_base2 = np.empty(max_samples, dtype=np.float64)
    table_base3 = np.empty(max_samples, dtype=np.float64)
    _fill_halton_table(table_base2, 2)
    _fill_halton_table(table_base3, 3)
    return table_base2, table_base3


def pixel_rng(seed: int, row: int, column: int) -> random.Random:
    """
    Independent generator for one pixel. Seeding from the pixel coordinates
    makes a render reproducible whatever the number or order of workers.
    """
    return random.Random(f"{seed}:{row}:{column}")
