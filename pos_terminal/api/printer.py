from fastapi import APIRouter, Depends, HTTPException, status
import logging

from pos_terminal.services.deps import get_receipt_service
from pos_terminal.services.receipt_service import ReceiptService
from pos_terminal.schemas.receipt import PrintRequest, PrinterResponse
from pos_terminal.utils.printer import PrinterConnectionError, PrinterError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Printer"])


@router.post(
    "/print",
    response_model=PrinterResponse,
    summary="Print a receipt",
    description="""
    Print a ticket for the sale described in the request body.

    The body is printed as sent; it is not checked against the stored sale.
    Use `POST /api/sales/{id}/print` to reprint from stored data.
    """
)
def print_receipt(
    print_data: PrintRequest,
    receipts: ReceiptService = Depends(get_receipt_service)
):
    try:
        receipts.print_receipt(print_data.sale_id, print_data.total, print_data.items)
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

    return PrinterResponse(message="Printed successfully")


@router.post(
    "/drawer",
    response_model=PrinterResponse,
    summary="Open the cash drawer",
    description="Send a drawer pulse through the receipt printer."
)
def open_drawer(receipts: ReceiptService = Depends(get_receipt_service)):
    try:
        receipts.open_drawer()
    except PrinterConnectionError as e:
        logger.error(f"Error connecting to printer: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Printer connection failed"
        )
    except PrinterError as e:
        logger.error(f"Drawer error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Drawer error"
        )

    return PrinterResponse(message="Drawer opened")
