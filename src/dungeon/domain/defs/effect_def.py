"""Effect definition structures shared by items and scenario choices."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EffectDef:
    """One-shot consumable effect (``restore_health`` or ``temp_stat``)."""

    kind: str
    amount: int
    stat: str | None = None
