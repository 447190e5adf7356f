"""Transfer Routes — audit log reads and the ownership handover.

Invariants:
    - POST runs the whole handover in one transaction (see transfer_orchestrator)
    - There is no update or delete route: transfers are append-only
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.api.dependencies import read_access, write_access
from waterbox.core.caller_context import CallerContext
from waterbox.infrastructure.database import get_db
from waterbox.schemas.transfer import TransferRequest, TransferResponse
from waterbox.services.transfer_orchestrator import TransferOrchestrator

router = APIRouter(
    prefix="/api/v1/water-box-transfers", tags=["water-box-transfers"],
)


@router.get("", response_model=list[TransferResponse])
async def list_transfers(
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    transfers = await TransferOrchestrator(db, caller).list_all()
    return [TransferResponse.model_validate(t) for t in transfers]


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    transfer_id: int,
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    transfer = await TransferOrchestrator(db, caller).get_by_id(transfer_id)
    return TransferResponse.model_validate(transfer)


@router.post(
    "", response_model=TransferResponse, status_code=status.HTTP_201_CREATED,
)
async def create_transfer(
    body: TransferRequest,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    """Retire the current assignment and hand the box to its successor."""
    transfer = await TransferOrchestrator(db, caller).transfer(body)
    return TransferResponse.model_validate(transfer)
