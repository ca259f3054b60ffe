"""
Spell book: which spell each gesture casts for the active element.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .templates import GestureLabel


class Element(Enum):
    FIRE = "fire"
    WATER = "water"
    LIGHTNING = "lightning"
    AIR = "air"

    @classmethod
    def parse(cls, value: str) -> "Element":
        try:
            return cls(value.lower())
        except ValueError:
            valid = ", ".join(e.value for e in cls)
            raise ValueError(f"unknown element {value!r} (expected one of: {valid})") from None


@dataclass(frozen=True)
class Spell:
    spell_id: str
    name: str
    cooldown: float       # Seconds
    damage: int = 0
    heal: int = 0
    description: str = ""


def _book(*entries):
    return MappingProxyType({label: spell for label, spell in entries})


SPELL_BOOK: Mapping[Element, Mapping[GestureLabel, Spell]] = MappingProxyType({
    Element.FIRE: _book(
        (GestureLabel.TRIANGLE, Spell("fireball", "Fireball", 1.0, damage=15, description="Draw Triangle")),
        (GestureLabel.CHECKMARK, Spell("meteor", "Meteor", 15.0, damage=40, description="Draw Checkmark")),
        (GestureLabel.CIRCLE, Spell("flame_shield", "Flame Shield", 8.0, description="Draw Circle")),
        (GestureLabel.LINE_V, Spell("incinerate", "Incinerate", 0.5, damage=8, description="Draw Vertical Line")),
    ),
    Element.WATER: _book(
        (GestureLabel.LINE_V, Spell("frostbolt", "Frostbolt", 0.6, damage=10, description="Draw Vertical Line")),
        (GestureLabel.LINE_H, Spell("tsunami", "Tsunami", 5.0, damage=20, description="Draw Horizontal Line")),
        (GestureLabel.CIRCLE, Spell("bubble_shield", "Bubble Shield", 8.0, description="Draw Circle")),
        (GestureLabel.SQUARE, Spell("restoration", "Restoration", 12.0, heal=25, description="Draw Square")),
    ),
    Element.LIGHTNING: _book(
        (GestureLabel.LINE_V, Spell("zap", "Zap", 0.2, damage=5, description="Draw Vertical Line")),
        (GestureLabel.ZIGZAG, Spell("chain_lightning", "Chain Lightning", 6.0, damage=30, description="Draw ZigZag")),
        (GestureLabel.CIRCLE, Spell("static_field", "Static Field", 8.0, description="Draw Circle")),
        (GestureLabel.TRIANGLE, Spell("thunderclap", "Thunderclap", 3.0, damage=20, description="Draw Triangle")),
    ),
    Element.AIR: _book(
        (GestureLabel.LINE_H, Spell("wind_slash", "Wind Slash", 0.3, damage=8, description="Draw Horizontal Line")),
        (GestureLabel.S_CURVE, Spell("tornado", "Tornado", 10.0, damage=15, description="Draw S Shape")),
        (GestureLabel.CIRCLE, Spell("air_barrier", "Air Barrier", 8.0, description="Draw Circle")),
        (GestureLabel.TRIANGLE, Spell("vacuum", "Vacuum", 5.0, damage=25, description="Draw Triangle")),
    ),
})


@dataclass
class Loadout:
    """The active kit: gesture label -> spell."""
    name: str
    spells: Dict[GestureLabel, Spell] = field(default_factory=dict)

    def resolve(self, label: GestureLabel) -> Optional[Spell]:
        return self.spells.get(label)

    @classmethod
    def for_element(cls, element: Element) -> "Loadout":
        return cls(name=element.value, spells=dict(SPELL_BOOK[element]))
