from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import List, Optional, Union
import itertools
import logging
import threading

from config import Config
from models import Participant, Expense, SettlementResult, TransferMode
from exceptions import SplitterError
from settlement_optimizer import SettlementOptimizer
from example_data import load_example_data

# Configure logging
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Family Expense Splitter API",
    description="Split shared expenses between families and settle up with few transfers",
    version="1.0.0"
)

# CORS middleware to allow frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory group (in production, use a real database)
participants_db = {}
expenses_db = {}
_ids = itertools.count(1)
# Single writer: every edit to the group holds this lock
db_lock = threading.Lock()


def _next_id() -> str:
    return str(next(_ids))


# ===== DATA MODELS =====
class ParticipantCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the participant")
    join_previous_unit: bool = Field(False, description="Join the family of the most recently added participant")

class ExpenseCreate(BaseModel):
    payer_id: str = Field(..., description="ID of the participant who paid")
    amount: float = Field(..., gt=0, description="Amount of the expense")
    description: Optional[str] = Field(None, description="What the expense was for")

class UnitResponse(BaseModel):
    key: Union[int, str]
    member_names: List[str]
    representative: Participant

class SettlementRequest(BaseModel):
    participants: List[Participant]
    expenses: List[Expense]
    mode: TransferMode = TransferMode.OPTIMAL
    hub_participant_id: Optional[str] = None


# ===== ERROR HANDLING =====
@app.exception_handler(SplitterError)
async def splitter_error_handler(request: Request, exc: SplitterError):
    logger.error(f"Settlement failed: {exc}")
    return JSONResponse(status_code=400, content={"detail": exc.to_dict()})


# ===== API ENDPOINTS =====
@app.get("/")
async def root():
    return {"message": "Family Expense Splitter API"}

@app.post("/participants/", response_model=Participant)
async def create_participant(participant: ParticipantCreate):
    """Add a participant, optionally to the previous participant's family"""
    name = participant.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name must not be blank")

    with db_lock:
        if any(p.name == name for p in participants_db.values()):
            raise HTTPException(status_code=400, detail=f"Participant {name} already exists")
        if len(participants_db) >= Config.MAX_PARTICIPANTS:
            raise HTTPException(status_code=400, detail=f"Cannot exceed {Config.MAX_PARTICIPANTS} participants")

        existing = list(participants_db.values())
        if participant.join_previous_unit and existing:
            unit = existing[-1].unit
        else:
            unit = len(existing) + 1
            # Removals can leave the count pointing at a family still in use
            while any(p.unit == unit for p in existing):
                unit += 1

        created = Participant(id=_next_id(), name=name, unit=unit)
        participants_db[created.id] = created

    return created

@app.get("/participants/", response_model=List[Participant])
async def list_participants():
    """List all participants in insertion order"""
    return list(participants_db.values())

@app.delete("/participants/{participant_id}")
async def delete_participant(participant_id: str):
    """Remove a participant together with the expenses they paid"""
    with db_lock:
        if participant_id not in participants_db:
            raise HTTPException(status_code=404, detail="Participant not found")

        del participants_db[participant_id]
        orphaned = [eid for eid, e in expenses_db.items() if e.payer_id == participant_id]
        for expense_id in orphaned:
            del expenses_db[expense_id]

    return {"deleted": participant_id, "removed_expenses": orphaned}

@app.post("/expenses/", response_model=Expense)
async def create_expense(expense: ExpenseCreate):
    """Record an expense"""
    with db_lock:
        # Validate that payer exists
        if expense.payer_id not in participants_db:
            raise HTTPException(status_code=400, detail=f"Participant {expense.payer_id} does not exist")

        created = Expense(
            id=_next_id(),
            payer_id=expense.payer_id,
            amount=expense.amount,
            description=(expense.description or "").strip() or "Undescribed",
        )
        expenses_db[created.id] = created

    return created

@app.get("/expenses/", response_model=List[Expense])
async def list_expenses():
    """List all expenses"""
    return list(expenses_db.values())

@app.delete("/expenses/{expense_id}")
async def delete_expense(expense_id: str):
    """Remove an expense"""
    with db_lock:
        if expense_id not in expenses_db:
            raise HTTPException(status_code=404, detail="Expense not found")
        del expenses_db[expense_id]

    return {"deleted": expense_id}

@app.get("/units/", response_model=List[UnitResponse])
async def list_units():
    """List payment units (families) with their members"""
    units = {}
    for participant in participants_db.values():
        units.setdefault(participant.unit, []).append(participant)

    return [
        {"key": key, "member_names": [m.name for m in members], "representative": members[0]}
        for key, members in units.items()
    ]

@app.get("/settlements/", response_model=SettlementResult)
async def calculate_settlements(
    mode: TransferMode = TransferMode(Config.DEFAULT_TRANSFER_MODE),
    hub_participant_id: Optional[str] = None,
):
    """Calculate the settlement plan for the stored group"""
    with db_lock:
        participants = list(participants_db.values())
        expenses = list(expenses_db.values())

    return SettlementOptimizer.optimize_settlements(participants, expenses, mode, hub_participant_id)

@app.post("/settlements/calculate", response_model=SettlementResult)
async def calculate_settlements_for(request: SettlementRequest):
    """Calculate a settlement plan for the group supplied in the request body"""
    return SettlementOptimizer.optimize_settlements(
        request.participants,
        request.expenses,
        request.mode,
        request.hub_participant_id,
    )

@app.post("/example")
async def load_example():
    """Replace the stored group with the built-in example"""
    global _ids
    participants, expenses = load_example_data()

    with db_lock:
        participants_db.clear()
        expenses_db.clear()
        participants_db.update({p.id: p for p in participants})
        expenses_db.update({e.id: e for e in expenses})
        # Example ids overlap between the two lists; continue past both
        _ids = itertools.count(max(len(participants), len(expenses)) + 1)

    logger.info(f"Loaded example data: {len(participants)} participants, {len(expenses)} expenses")
    return {"participants": len(participants), "expenses": len(expenses)}

@app.delete("/reset")
async def reset():
    """Clear all stored data"""
    with db_lock:
        participants_db.clear()
        expenses_db.clear()

    return {"message": "All data cleared"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Config.API_HOST, port=Config.API_PORT)
