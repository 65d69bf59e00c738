from typing import Dict, List, Sequence, Tuple, Union
import logging

from models import Participant, Expense, PaymentUnit, Settlement
from exceptions import EmptyInputError, DanglingReferenceError

logger = logging.getLogger(__name__)


class BalanceCalculator:
    @staticmethod
    def group_units(participants: Sequence[Participant]) -> Dict[Union[int, str], PaymentUnit]:
        """Group participants by unit key, keeping first-seen key order"""
        units = {}

        for participant in participants:
            if participant.unit not in units:
                # First member encountered becomes the representative
                units[participant.unit] = PaymentUnit(
                    key=participant.unit,
                    members=[],
                    representative=participant,
                )
            units[participant.unit].members.append(participant)

        return units

    @staticmethod
    def compute_settlements(
        participants: Sequence[Participant],
        expenses: Sequence[Expense],
    ) -> Tuple[float, float, List[Settlement]]:
        """
        Compute each payment unit's net balance.

        Args:
            participants: Everyone sharing the costs, in insertion order
            expenses: Recorded expenses

        Returns:
            (total_amount, per_person_amount, settlements) with one settlement
            per unit, in first-seen unit order
        """
        if not participants:
            raise EmptyInputError("No participants supplied")
        if not expenses:
            raise EmptyInputError("No expenses supplied")

        total_amount = sum(expense.amount for expense in expenses)
        # The share is per individual, so larger units owe proportionally more
        per_person_amount = total_amount / len(participants)

        units = BalanceCalculator.group_units(participants)
        unit_by_participant = {p.id: units[p.unit] for p in participants}

        for expense in expenses:
            unit = unit_by_participant.get(expense.payer_id)
            if unit is None:
                raise DanglingReferenceError(
                    "Expense payer is not a known participant",
                    {"expense_id": expense.id, "payer_id": expense.payer_id},
                )
            unit.total_paid += expense.amount

        settlements = []
        for unit in units.values():
            unit.should_pay = len(unit.members) * per_person_amount
            net_amount = unit.total_paid - unit.should_pay
            logger.debug(
                f"Unit {unit.key}: paid={unit.total_paid:.2f} "
                f"should_pay={unit.should_pay:.2f} net={net_amount:.2f}"
            )
            settlements.append(Settlement(
                unit=unit,
                net_amount=net_amount,
                representative=unit.representative,
            ))

        return total_amount, per_person_amount, settlements

    @staticmethod
    def split_by_role(settlements: Sequence[Settlement]) -> Tuple[List[Settlement], List[Settlement]]:
        """Separate creditors and debtors; balanced units belong to neither"""
        creditors = [s for s in settlements if s.is_creditor]
        debtors = [s for s in settlements if s.is_debtor]
        return creditors, debtors


def compute_settlements(participants, expenses):
    return BalanceCalculator.compute_settlements(participants, expenses)
