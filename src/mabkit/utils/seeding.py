from __future__ import annotations

import random

import numpy as np

from .. import dists


def set_global_seed(seed: int) -> None:
    """Seed the module-level generators used when no ``rng`` is passed.

    Only random draws are affected. Arm selection itself is a hash of the unit and
    needs no seeding to be reproducible.
    """
    seed = int(seed)
    random.seed(seed)
    np.random.seed(seed)
    dists._default_rng = np.random.default_rng(seed)
