"""
Injectable random-number source for the randomized algorithms (k-means++ seeding, Monte Carlo sampling) so that tests can pass a seeded generator and assert exact outputs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from config import settings


def resolve_rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(settings.random_seed)
