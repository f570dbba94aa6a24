from datetime import datetime
from typing import List, Optional, Sequence
import logging

from pos_terminal.schemas.receipt import PrintDirective
from pos_terminal.schemas.sale import SaleLine
from pos_terminal.services.receipt_formatter import ReceiptFormatter
from pos_terminal.utils.printer import PrinterDriver

logger = logging.getLogger(__name__)


class ReceiptService:
    """
    Sends receipts and drawer pulses to the configured printer.

    A connection is opened for every job and closed when the job ends,
    whether or not it succeeded. Connection errors propagate to the caller;
    nothing is retried.
    """

    def __init__(
        self,
        driver: PrinterDriver,
        address: str,
        formatter: ReceiptFormatter,
        drawer_pin: int = 2,
    ):
        self.driver = driver
        self.address = address
        self.formatter = formatter
        self.drawer_pin = drawer_pin

    def print_receipt(
        self,
        sale_id: int,
        total: float,
        items: Sequence[SaleLine],
        printed_at: Optional[datetime] = None,
    ) -> List[PrintDirective]:
        """
        Print the ticket for a sale.

        Returns:
            The directives that were sent

        Raises:
            PrinterConnectionError: If the printer can't be reached
            PrinterError: If the printer fails mid-job
        """
        directives = self.formatter.format_receipt(
            sale_id, total, items, printed_at or datetime.now()
        )
        self._send(directives)
        logger.info(f"Receipt for sale #{sale_id} printed ({len(items)} lines)")
        return directives

    def open_drawer(self) -> List[PrintDirective]:
        """Pulse the cash drawer."""
        directives = self.formatter.drawer_pulse(self.drawer_pin)
        self._send(directives)
        logger.info(f"Cash drawer opened (pin {self.drawer_pin})")
        return directives

    def _send(self, directives: List[PrintDirective]) -> None:
        connection = self.driver.open(self.address)
        try:
            connection.emit(directives)
        finally:
            connection.close()
