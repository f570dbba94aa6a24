from fastapi import Request

from pos_terminal.services.receipt_formatter import ReceiptFormatter
from pos_terminal.services.receipt_service import ReceiptService


def get_receipt_service(request: Request) -> ReceiptService:
    """Build a ReceiptService from the application's settings and printer driver."""
    settings = request.app.state.settings
    return ReceiptService(
        driver=request.app.state.printer_driver,
        address=settings.PRINTER_IP,
        formatter=ReceiptFormatter.from_settings(settings),
        drawer_pin=settings.CASH_DRAWER_PIN,
    )
