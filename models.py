from pydantic import BaseModel, Field
from typing import List, Optional, Union
from enum import Enum

from config import Config

# Absolute currency tolerance used for every balance comparison
TOLERANCE = 0.01


class TransferMode(str, Enum):
    OPTIMAL = "optimal"
    HUB = "hub"


class TransferPhase(str, Enum):
    COLLECT = "collect"
    DISTRIBUTE = "distribute"


class Participant(BaseModel):
    id: str
    name: str
    unit: Union[int, str] = Field(..., description="Payment unit (family) key")


class Expense(BaseModel):
    id: str
    payer_id: str
    amount: float
    description: str = "Undescribed"


class PaymentUnit(BaseModel):
    key: Union[int, str]
    members: List[Participant] = []
    total_paid: float = 0.0
    should_pay: float = 0.0
    representative: Participant

    @property
    def member_names(self) -> List[str]:
        return [member.name for member in self.members]


class Settlement(BaseModel):
    unit: PaymentUnit
    net_amount: float
    representative: Participant

    @property
    def is_creditor(self) -> bool:
        return self.net_amount > TOLERANCE

    @property
    def is_debtor(self) -> bool:
        return self.net_amount < -TOLERANCE

    @property
    def is_balanced(self) -> bool:
        return not (self.is_creditor or self.is_debtor)

    @property
    def status(self) -> str:
        if self.is_creditor:
            return "owed"
        if self.is_debtor:
            return "owes"
        return "balanced"

    def describe(self) -> str:
        """One-line summary, e.g. 'Liu, Shi: owed €36.57'"""
        names = ", ".join(self.unit.member_names)
        if self.is_balanced:
            return f"{names}: balanced"
        return f"{names}: {self.status} {Config.CURRENCY_SYMBOL}{abs(self.net_amount):.2f}"


class Transfer(BaseModel):
    from_participant: Participant
    to_participant: Participant
    amount: float
    phase: Optional[TransferPhase] = None

    def describe(self) -> str:
        return (
            f"{self.from_participant.name} -> {self.to_participant.name}: "
            f"{Config.CURRENCY_SYMBOL}{self.amount:.2f}"
        )


class SettlementResult(BaseModel):
    mode: TransferMode
    total_amount: float
    per_person_amount: float
    settlements: List[Settlement]
    transfers: List[Transfer]
    hub: Optional[Participant] = None

    @property
    def participant_count(self) -> int:
        return sum(len(s.unit.members) for s in self.settlements)

    @property
    def unit_count(self) -> int:
        return len(self.settlements)

    @property
    def transfer_count(self) -> int:
        return len(self.transfers)

    @property
    def summary(self) -> str:
        if self.mode == TransferMode.HUB:
            return "Everyone only deals with the hub"
        return "Minimized number of transfers"

    def transfers_in_phase(self, phase: TransferPhase) -> List[Transfer]:
        return [t for t in self.transfers if t.phase == phase]
