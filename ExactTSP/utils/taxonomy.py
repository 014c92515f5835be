from __future__ import annotations

from enum import Enum


class AlgorithmFamily(str, Enum):
    ENUMERATION = "enumeration"
    PARALLEL_ENUMERATION = "parallel_enumeration"
    BRANCH_AND_BOUND = "branch_and_bound"
    DYNAMIC_PROGRAMMING = "dynamic_programming"


__all__ = ["AlgorithmFamily"]
