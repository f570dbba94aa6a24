import logging
from typing import Iterable, Optional, Protocol

from escpos.exceptions import DeviceNotFoundError, Error as EscposError
from escpos.printer import Network

from pos_terminal.schemas.receipt import DirectiveKind, PrintDirective

logger = logging.getLogger(__name__)


class PrinterError(Exception):
    """Exception raised when the printer fails while a job is being sent."""
    pass


class PrinterConnectionError(PrinterError):
    """Exception raised when the printer cannot be reached."""
    pass


class PrinterConnection(Protocol):
    def emit(self, directives: Iterable[PrintDirective]) -> None:
        ...

    def close(self) -> None:
        ...


class PrinterDriver(Protocol):
    """
    Anything that can open a connection to a receipt printer.

    ``open`` either returns a live connection or raises
    PrinterConnectionError; nothing is printed before it returns.
    """

    def open(self, address: str) -> PrinterConnection:
        ...


class EscposConnection:
    """
    A connection to a network ESC/POS printer, backed by python-escpos.

    Replays formatter directives as python-escpos calls.
    """

    def __init__(self, printer: Network):
        self.printer = printer

    def emit(self, directives: Iterable[PrintDirective]) -> None:
        try:
            for directive in directives:
                self._apply(directive)
        except (OSError, EscposError) as e:
            raise PrinterError(f"Printer error: {e}") from e

    def _apply(self, directive: PrintDirective) -> None:
        if directive.kind == DirectiveKind.STYLE:
            style = {}
            if directive.align is not None:
                style["align"] = directive.align.value
            if directive.bold is not None:
                style["bold"] = directive.bold
            if directive.size == 2:
                style["double_width"] = True
                style["double_height"] = True
            elif directive.size == 1:
                style["normal_textsize"] = True
            self.printer.set(**style)
        elif directive.kind == DirectiveKind.TEXT:
            self.printer.textln(directive.text or "")
        elif directive.kind == DirectiveKind.FEED:
            self.printer.ln(directive.lines or 1)
        elif directive.kind == DirectiveKind.CUT:
            self.printer.cut()
        elif directive.kind == DirectiveKind.CASHDRAW:
            self.printer.cashdraw(directive.pin or 2)

    def close(self) -> None:
        try:
            self.printer.close()
        except OSError as e:
            logger.warning(f"Error closing printer connection: {e}")


class EscposNetworkDriver:
    """Opens raw TCP connections (port 9100 by default) to ESC/POS printers."""

    def __init__(self, port: int = 9100, timeout: Optional[float] = 60):
        self.port = port
        self.timeout = timeout

    def open(self, address: str) -> EscposConnection:
        printer = Network(address, port=self.port, timeout=self.timeout)
        try:
            printer.open()
        except (DeviceNotFoundError, OSError) as e:
            raise PrinterConnectionError(f"Could not connect to printer at {address}:{self.port}") from e

        logger.info(f"Connected to printer at {address}:{self.port}")
        return EscposConnection(printer)
