from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
import logging

from pos_terminal.database import get_db
from pos_terminal.services.deps import get_receipt_service
from pos_terminal.services.receipt_service import ReceiptService
from pos_terminal.services.sale_service import (
    SaleService,
    SaleCommitError,
    ProductNotFoundError
)
from pos_terminal.schemas.receipt import PrinterResponse
from pos_terminal.schemas.sale import (
    SaleCreate,
    MAX_DB_INT,
    SaleCreateResponse,
    SaleDetail,
    SaleSummary
)
from pos_terminal.utils.printer import PrinterConnectionError, PrinterError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post(
    "",
    response_model=SaleCreateResponse,
    summary="Check out a cart",
    description="""
    Record a sale and decrement stock for every cart line.

    The sale header, its line items and the stock updates are committed in a
    single transaction. The total is stored as sent and stock is not checked
    for sufficiency.
    """
)
def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db)
):
    """
    - **total**: Amount charged
    - **items**: Cart lines, each with product `id`, `quantity` and unit `price`
    """
    service = SaleService(db)

    try:
        sale = service.create_sale(sale_data)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except SaleCommitError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process sale"
        )

    return SaleCreateResponse(sale_id=sale.id)


@router.get(
    "",
    response_model=list[SaleSummary],
    summary="List all sales",
    description="Sales history, newest first, with the number of lines in each sale."
)
def list_sales(db: Session = Depends(get_db)):
    service = SaleService(db)
    return service.list_sales()


@router.get(
    "/{sale_id}",
    response_model=SaleDetail,
    summary="Get sale by ID",
    description="Get a sale with its line items as they were charged."
)
def get_sale(
    sale_id: int = Path(..., ge=1, le=MAX_DB_INT),
    db: Session = Depends(get_db)
):
    service = SaleService(db)
    sale = service.get_sale_detail(sale_id)

    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found"
        )

    return sale


@router.post(
    "/{sale_id}/print",
    response_model=PrinterResponse,
    summary="Reprint a sale",
    description="Print the ticket of a recorded sale using its stored line items."
)
def reprint_sale(
    sale_id: int = Path(..., ge=1, le=MAX_DB_INT),
    db: Session = Depends(get_db),
    receipts: ReceiptService = Depends(get_receipt_service)
):
    service = SaleService(db)
    sale = service.get_sale_detail(sale_id)

    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found"
        )

    try:
        receipts.print_receipt(sale.id, sale.total, sale.items)
    except PrinterConnectionError as e:
        logger.error(f"Error connecting to printer: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Printer connection failed"
        )
    except PrinterError as e:
        logger.error(f"Printer error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Printer error"
        )

    return PrinterResponse(message=f"Ticket #{sale.id} sent to printer")
