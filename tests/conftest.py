import pytest

from models import Participant, Expense


def make_group(units, payments):
    """
    Build participants and expenses from compact descriptions.

    units: list of (name, unit) in insertion order; ids are the names
    payments: list of (payer_name, amount)
    """
    participants = [Participant(id=name, name=name, unit=unit) for name, unit in units]
    expenses = [
        Expense(id=f"e{index}", payer_id=payer, amount=amount)
        for index, (payer, amount) in enumerate(payments, start=1)
    ]
    return participants, expenses


def unit_flows(result):
    """Net money received per unit key according to the transfers"""
    unit_of = {}
    for settlement in result.settlements:
        for member in settlement.unit.members:
            unit_of[member.id] = settlement.unit.key

    flows = {settlement.unit.key: 0.0 for settlement in result.settlements}
    for transfer in result.transfers:
        flows[unit_of[transfer.to_participant.id]] += transfer.amount
        flows[unit_of[transfer.from_participant.id]] -= transfer.amount
    return flows


@pytest.fixture
def two_units():
    return make_group([("A", 1), ("B", 2)], [("A", 100.0)])


@pytest.fixture
def shared_family():
    return make_group([("A", 1), ("B", 1), ("C", 2)], [("C", 90.0)])


@pytest.fixture
def three_units():
    # Nets: A +40, B +10, C -50
    return make_group([("A", 1), ("B", 2), ("C", 3)], [("A", 90.0), ("B", 60.0)])


@pytest.fixture
def hub_group():
    # Nets: A -20, B +15, C +5, D 0
    return make_group(
        [("A", 1), ("B", 2), ("C", 3), ("D", 4)],
        [("B", 35.0), ("C", 25.0), ("D", 20.0)],
    )
