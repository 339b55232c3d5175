"""Contribution Ledger routes for guests: pix key, receipt upload, submission."""
import logging
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from gift_registry.config import settings
from gift_registry.database import get_db
from gift_registry.deps import get_current_guest
from gift_registry.errors import ValidationError
from gift_registry.schemas.contribution import ContributionCreate, ContributionCreated, PixKeyOut, ReceiptOut
from gift_registry.services import contribution_service
from gift_registry.storage.blob_store import LocalBlobStore, get_blob_store

logger = logging.getLogger(__name__)
CHUNK_SIZE = 1024 * 1024
router = APIRouter(dependencies=[Depends(get_current_guest)])


@router.get("/pix-key", response_model=PixKeyOut)
def get_pix_key(db: Session = Depends(get_db)):
    """The off-band payment key guests transfer to."""
    return PixKeyOut(pix_key=contribution_service.get_pix_key(db))


@router.post("/receipts", response_model=ReceiptOut, status_code=status.HTTP_201_CREATED)
async def upload_receipt(
    receipt: UploadFile = File(...),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    """Store a receipt and return the reference to submit with the contribution."""
    if receipt.content_type not in settings.ALLOWED_RECEIPT_TYPES:
        raise ValidationError(f"Unsupported receipt type: {receipt.content_type}")
    limit = int(settings.MAX_RECEIPT_SIZE_MB * 1024 * 1024)
    data = b""
    while chunk := await receipt.read(min(CHUNK_SIZE, limit + 1)):
        data += chunk
        if len(data) > limit:
            raise ValidationError(f"Receipt exceeds {settings.MAX_RECEIPT_SIZE_MB} MB")
    if not data:
        raise ValidationError("Receipt file is empty")
    reference = blob_store.put(data, receipt.filename or "")
    logger.info("Stored receipt %s (%d bytes)", reference, len(data))
    return ReceiptOut(receipt_ref=reference)


@router.post("/", response_model=ContributionCreated, status_code=status.HTTP_201_CREATED)
def submit_contribution(
    payload: ContributionCreate,
    db: Session = Depends(get_db),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    contribution_id = contribution_service.submit(
        db=db,
        blob_store=blob_store,
        amount=payload.amount,
        name=payload.contributor_name,
        phone=payload.contributor_phone,
        receipt_ref=payload.receipt_ref,
    )
    logger.info("Contribution %s submitted by %s", contribution_id, payload.contributor_name)
    return ContributionCreated(id=contribution_id, status="pending")
