import pytest

from casting.cooldown import CooldownGate, DispatchOutcome
from casting.loadout import SPELL_BOOK, Element, Loadout, Spell
from casting.templates import GestureLabel

FIREBALL = Spell("fireball", "Fireball", cooldown=1.0, damage=15)


@pytest.fixture
def gate():
    return CooldownGate()


@pytest.fixture
def loadout():
    return Loadout(name="test", spells={GestureLabel.TRIANGLE: FIREBALL})


def test_recast_inside_cooldown_is_rejected(gate, loadout):
    first = gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.0)
    second = gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.4)
    third = gate.dispatch(GestureLabel.TRIANGLE, loadout, now=1.001)

    assert first.outcome is DispatchOutcome.CAST
    assert first.spell is FIREBALL
    assert second.outcome is DispatchOutcome.REJECTED_COOLDOWN
    assert second.spell is FIREBALL
    assert second.remaining == pytest.approx(0.6)
    assert third.outcome is DispatchOutcome.CAST


def test_rejection_does_not_touch_timestamp(gate, loadout):
    gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.0)
    gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.9)
    assert gate.last_cast(FIREBALL) == 0.0
    # Had the rejected attempt counted, this would still be cooling down
    assert gate.dispatch(GestureLabel.TRIANGLE, loadout, now=1.0).cast


def test_elapsed_equal_to_cooldown_succeeds(gate, loadout):
    gate.dispatch(GestureLabel.TRIANGLE, loadout, now=10.0)
    assert gate.dispatch(GestureLabel.TRIANGLE, loadout, now=11.0).outcome is DispatchOutcome.CAST


def test_unmapped_gesture(gate, loadout):
    result = gate.dispatch(GestureLabel.SQUARE, loadout, now=0.0)

    assert result.outcome is DispatchOutcome.REJECTED_UNMAPPED
    assert result.spell is None
    assert gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.0).cast


def test_slots_are_independent(gate):
    shield = Spell("shield", "Shield", cooldown=8.0)
    loadout = Loadout("test", {GestureLabel.TRIANGLE: FIREBALL, GestureLabel.CIRCLE: shield})

    assert gate.dispatch(GestureLabel.TRIANGLE, loadout, 0.0).cast
    assert gate.dispatch(GestureLabel.CIRCLE, loadout, 0.1).cast
    assert gate.dispatch(GestureLabel.TRIANGLE, loadout, 1.2).cast
    assert not gate.dispatch(GestureLabel.CIRCLE, loadout, 1.2).cast


def test_same_shape_different_loadouts_have_their_own_cooldowns(gate):
    fire = Loadout.for_element(Element.FIRE)
    lightning = Loadout.for_element(Element.LIGHTNING)

    fireball = gate.dispatch(GestureLabel.TRIANGLE, fire, 0.0)
    thunderclap = gate.dispatch(GestureLabel.TRIANGLE, lightning, 0.0)

    assert fireball.spell.name == "Fireball"
    assert thunderclap.spell.name == "Thunderclap"
    assert thunderclap.cast
    assert gate.dispatch(GestureLabel.TRIANGLE, fire, 1.5).cast
    assert not gate.dispatch(GestureLabel.TRIANGLE, lightning, 1.5).cast


def test_clock_going_backwards_never_records_future_timestamp(gate, loadout):
    gate.dispatch(GestureLabel.TRIANGLE, loadout, now=5.0)
    result = gate.dispatch(GestureLabel.TRIANGLE, loadout, now=4.0)
    assert result.outcome is DispatchOutcome.REJECTED_COOLDOWN
    assert gate.last_cast(FIREBALL) == 5.0


def test_remaining_and_progress(gate, loadout):
    assert gate.progress(FIREBALL, 0.0) == 1.0
    gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.0)
    assert gate.remaining(FIREBALL, 0.25) == pytest.approx(0.75)
    assert gate.progress(FIREBALL, 0.25) == pytest.approx(0.25)
    assert gate.progress(FIREBALL, 3.0) == 1.0


def test_reset_clears_every_slot(gate, loadout):
    gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.0)
    gate.reset()
    assert gate.last_cast(FIREBALL) is None
    assert gate.dispatch(GestureLabel.TRIANGLE, loadout, now=0.1).cast


def test_spell_book_covers_every_element():
    for element in Element:
        loadout = Loadout.for_element(element)
        assert GestureLabel.CIRCLE in loadout.spells
        assert all(spell.cooldown > 0 for spell in loadout.spells.values())
    assert SPELL_BOOK[Element.LIGHTNING][GestureLabel.LINE_V].cooldown == pytest.approx(0.2)


def test_element_parse():
    assert Element.parse("Water") is Element.WATER
    with pytest.raises(ValueError):
        Element.parse("earth")
