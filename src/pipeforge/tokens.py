"""Classified token model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenMode(str, Enum):
    RAW = "raw"  # '...'
    WEAK = "weak"  # "..."
    FULL = "full"  # unquoted


@dataclass(frozen=True)
class Token:
    value: str
    mode: TokenMode = TokenMode.FULL

    @property
    def expandable(self) -> bool:
        """True when variable substitution applies to this token."""
        return self.mode is not TokenMode.RAW
