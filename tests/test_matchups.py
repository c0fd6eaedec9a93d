import pytest

from squad.matchups import Relation, TroopType, resolve_type_advantage, type_relation


CYCLE = [
    (TroopType.TANK, TroopType.MISSILE),
    (TroopType.MISSILE, TroopType.AIR),
    (TroopType.AIR, TroopType.TANK),
]


@pytest.mark.parametrize("troop", list(TroopType))
def test_same_type_is_neutral(troop: TroopType) -> None:
    adv = resolve_type_advantage(troop, troop)
    assert adv.label == Relation.NEUTRAL
    assert adv.damage_dealt_multiplier == 1.0
    assert adv.damage_taken_multiplier == 1.0
    assert adv.effective_power_multiplier == 1.0


@pytest.mark.parametrize("attacker,defender", CYCLE)
def test_cycle_advantage_and_reverse_disadvantage(attacker: TroopType, defender: TroopType) -> None:
    adv = resolve_type_advantage(attacker, defender)
    assert adv.label == Relation.ADVANTAGE
    assert (adv.damage_dealt_multiplier, adv.damage_taken_multiplier, adv.effective_power_multiplier) == (
        1.2,
        0.8,
        1.44,
    )

    rev = resolve_type_advantage(defender, attacker)
    assert rev.label == Relation.DISADVANTAGE
    assert (rev.damage_dealt_multiplier, rev.damage_taken_multiplier, rev.effective_power_multiplier) == (
        0.8,
        1.2,
        0.64,
    )


def test_accepts_string_literals_and_serializes_plain_values() -> None:
    adv = resolve_type_advantage("air", "tank")
    assert adv.attacker is TroopType.AIR
    assert adv.to_dict() == {
        "attacker": "air",
        "defender": "tank",
        "damage_dealt_multiplier": 1.2,
        "damage_taken_multiplier": 0.8,
        "effective_power_multiplier": 1.44,
        "label": "advantage",
    }


def test_relation_is_total_over_all_pairs() -> None:
    labels = {(a, d): type_relation(a, d) for a in TroopType for d in TroopType}
    assert len(labels) == 9
    assert sum(1 for r in labels.values() if r == Relation.ADVANTAGE) == 3
    assert sum(1 for r in labels.values() if r == Relation.DISADVANTAGE) == 3
    assert sum(1 for r in labels.values() if r == Relation.NEUTRAL) == 3


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_type_advantage("infantry", "tank")
