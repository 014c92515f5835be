from __future__ import annotations

from typing import Any


class BaseSelector:
    """Interface for ExactTSP selector strategies."""

    def predict(self, features: dict[str, Any]):
        raise NotImplementedError


__all__ = ["BaseSelector"]
