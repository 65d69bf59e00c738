from typing import List, Optional, Sequence, Union
import logging

from models import (
    TOLERANCE,
    Participant,
    Expense,
    Settlement,
    SettlementResult,
    Transfer,
    TransferMode,
    TransferPhase,
)
from balance_calculator import BalanceCalculator
from exceptions import InvalidHubError, InvalidModeError

logger = logging.getLogger(__name__)


class SettlementOptimizer:
    @staticmethod
    def parse_mode(mode: Union[str, TransferMode]) -> TransferMode:
        try:
            return TransferMode(mode)
        except ValueError:
            raise InvalidModeError(
                f"Unknown transfer mode: {mode}",
                {"allowed": [m.value for m in TransferMode]},
            )

    @staticmethod
    def generate_optimal_transfers(
        creditors: Sequence[Settlement],
        debtors: Sequence[Settlement],
    ) -> List[Transfer]:
        """Greedily match the largest creditor with the largest debtor"""
        transfers = []

        # Work on copies of the amounts; debts as positive magnitudes
        creditors = [[s.representative, s.net_amount] for s in creditors]
        debtors = [[s.representative, -s.net_amount] for s in debtors]

        # list.sort is stable, equal amounts keep their original order
        creditors.sort(key=lambda x: x[1], reverse=True)
        debtors.sort(key=lambda x: x[1], reverse=True)

        i = j = 0
        while i < len(creditors) and j < len(debtors):
            creditor = creditors[i]
            debtor = debtors[j]

            amount = min(creditor[1], debtor[1])

            if amount > TOLERANCE:
                transfers.append(Transfer(
                    from_participant=debtor[0],
                    to_participant=creditor[0],
                    amount=amount,
                ))
                creditor[1] -= amount
                debtor[1] -= amount

            advanced = False
            if creditor[1] < TOLERANCE:
                i += 1
                advanced = True
            if debtor[1] < TOLERANCE:
                j += 1
                advanced = True

            # A remainder of exactly the tolerance neither emits nor advances
            if not advanced:
                if creditor[1] <= debtor[1]:
                    i += 1
                else:
                    j += 1

        return transfers

    @staticmethod
    def generate_hub_transfers(
        settlements: Sequence[Settlement],
        hub: Participant,
    ) -> List[Transfer]:
        """Route every payment through the hub: collect first, then distribute"""
        hub_settlement = next((s for s in settlements if s.unit.key == hub.unit), None)
        if hub_settlement is None:
            raise InvalidHubError(
                "Hub participant's unit is not among the settlements",
                {"hub_id": hub.id, "unit": hub.unit},
            )

        others = [s for s in settlements if s is not hub_settlement]
        transfers = []
        collected = 0.0
        distributed = 0.0

        for settlement in others:
            if settlement.is_debtor:
                amount = -settlement.net_amount
                transfers.append(Transfer(
                    from_participant=settlement.representative,
                    to_participant=hub,
                    amount=amount,
                    phase=TransferPhase.COLLECT,
                ))
                collected += amount

        for settlement in others:
            if settlement.is_creditor:
                amount = settlement.net_amount
                transfers.append(Transfer(
                    from_participant=hub,
                    to_participant=settlement.representative,
                    amount=amount,
                    phase=TransferPhase.DISTRIBUTE,
                ))
                distributed += amount

        hub_balance = hub_settlement.net_amount + collected - distributed
        logger.debug(
            f"Hub {hub.name}: collected={collected:.2f} distributed={distributed:.2f} "
            f"balance={hub_balance:.2f}"
        )

        # The hub keeps exactly its own net amount, up to skipped balanced units
        assert abs((collected - distributed) - hub_settlement.net_amount) <= TOLERANCE * len(settlements)

        return transfers

    @staticmethod
    def optimize_settlements(
        participants: Sequence[Participant],
        expenses: Sequence[Expense],
        mode: Union[str, TransferMode] = TransferMode.OPTIMAL,
        hub_participant_id: Optional[str] = None,
    ) -> SettlementResult:
        """Main method to calculate the settlement plan"""
        mode = SettlementOptimizer.parse_mode(mode)

        total_amount, per_person_amount, settlements = BalanceCalculator.compute_settlements(
            participants, expenses
        )

        hub = None
        if mode == TransferMode.HUB:
            if not hub_participant_id:
                raise InvalidHubError("Hub mode requires a hub participant")
            hub = next((p for p in participants if p.id == hub_participant_id), None)
            if hub is None:
                raise InvalidHubError(
                    "Hub participant is not among the participants",
                    {"hub_id": hub_participant_id},
                )
            transfers = SettlementOptimizer.generate_hub_transfers(settlements, hub)
        else:
            creditors, debtors = BalanceCalculator.split_by_role(settlements)
            transfers = SettlementOptimizer.generate_optimal_transfers(creditors, debtors)

        logger.info(
            f"Settled {len(settlements)} units in {mode.value} mode with {len(transfers)} transfers"
        )

        return SettlementResult(
            mode=mode,
            total_amount=total_amount,
            per_person_amount=per_person_amount,
            settlements=settlements,
            transfers=transfers,
            hub=hub,
        )


def optimize_settlements(participants, expenses, mode=TransferMode.OPTIMAL, hub_participant_id=None):
    return SettlementOptimizer.optimize_settlements(participants, expenses, mode, hub_participant_id)
