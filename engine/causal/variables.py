"""
Variable type inference for causal discovery.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Sequence

from config import settings
from engine.enums import VariableType


def infer_variable_type(values: Sequence[float]) -> VariableType:
    distinct = set(float(v) for v in values)
    if len(distinct) == 2:
        return VariableType.binary
    if len(distinct) <= settings.causal_categorical_max_levels and all(v.is_integer() for v in distinct):
        return VariableType.categorical
    return VariableType.continuous
