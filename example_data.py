from typing import List, Tuple

from models import Participant, Expense

# A weekend trip shared by six families; Liu/Shi and Song/Wu are couples
EXAMPLE_PARTICIPANTS = [
    {"name": "Cui (m)", "unit": 1},
    {"name": "Cui (f)", "unit": 2},
    {"name": "Li", "unit": 3},
    {"name": "Liu", "unit": 4},
    {"name": "Shi", "unit": 4},
    {"name": "Song", "unit": 5},
    {"name": "Wu", "unit": 5},
    {"name": "Zhou", "unit": 6},
]

EXAMPLE_EXPENSES = [
    {"payer_id": "1", "amount": 30.24, "description": "Paid by Cui (m)"},
    {"payer_id": "3", "amount": 17.5, "description": "Paid by Li"},
    {"payer_id": "4", "amount": 81.25, "description": "Paid by Liu and Shi"},
    {"payer_id": "6", "amount": 22.0, "description": "Paid by Song and Wu"},
    {"payer_id": "8", "amount": 27.73, "description": "Paid by Zhou"},
]


def load_example_data() -> Tuple[List[Participant], List[Expense]]:
    participants = [
        Participant(id=str(index + 1), **person)
        for index, person in enumerate(EXAMPLE_PARTICIPANTS)
    ]
    expenses = [
        Expense(id=str(index + 1), **expense)
        for index, expense in enumerate(EXAMPLE_EXPENSES)
    ]
    return participants, expenses
