"""
Per-spell cooldown gate.

The gate owns the last-cast timestamps and is handed to whoever dispatches,
so tests can drive it with their own clock values.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional
import logging

from .loadout import Loadout, Spell
from .templates import GestureLabel

logger = logging.getLogger(__name__)


class DispatchOutcome(Enum):
    CAST = auto()
    REJECTED_COOLDOWN = auto()
    REJECTED_UNMAPPED = auto()


@dataclass(frozen=True)
class DispatchResult:
    outcome: DispatchOutcome
    label: GestureLabel
    spell: Optional[Spell] = None
    remaining: float = 0.0   # Seconds left on the cooldown when rejected

    @property
    def cast(self) -> bool:
        return self.outcome is DispatchOutcome.CAST


class CooldownGate:
    """Tracks the last successful cast per spell slot."""

    def __init__(self):
        self._last_cast: Dict[str, float] = {}

    def last_cast(self, spell: Spell) -> Optional[float]:
        return self._last_cast.get(spell.spell_id)

    def remaining(self, spell: Spell, now: float) -> float:
        last = self._last_cast.get(spell.spell_id)
        if last is None:
            return 0.0
        return max(0.0, spell.cooldown - (now - last))

    def progress(self, spell: Spell, now: float) -> float:
        """Cooldown progress 0..1, 1 meaning ready."""
        if spell.cooldown <= 0:
            return 1.0
        return min(1.0, max(0.0, 1.0 - self.remaining(spell, now) / spell.cooldown))

    def is_ready(self, spell: Spell, now: float) -> bool:
        last = self._last_cast.get(spell.spell_id)
        return last is None or now - last >= spell.cooldown

    def dispatch(self, label: GestureLabel, loadout: Loadout, now: float) -> DispatchResult:
        spell = loadout.resolve(label)
        if spell is None:
            logger.debug("%s has no spell in loadout %s", label.name, loadout.name)
            return DispatchResult(DispatchOutcome.REJECTED_UNMAPPED, label)

        if not self.is_ready(spell, now):
            remaining = self.remaining(spell, now)
            logger.debug("%s on cooldown (%.2fs left)", spell.name, remaining)
            return DispatchResult(DispatchOutcome.REJECTED_COOLDOWN, label, spell, remaining)

        self._last_cast[spell.spell_id] = now
        logger.info("cast %s", spell.name)
        return DispatchResult(DispatchOutcome.CAST, label, spell)

    def reset(self) -> None:
        self._last_cast.clear()
