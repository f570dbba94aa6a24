from datetime import datetime
from typing import List, Sequence, Tuple

from pos_terminal.config import Settings
from pos_terminal.schemas.receipt import Align, DirectiveKind, PrintDirective
from pos_terminal.schemas.sale import SaleLine

# (header, share of receipt width, alignment)
TABLE_COLUMNS: Tuple[Tuple[str, float, Align], ...] = (
    ("Cant", 0.15, Align.LEFT),
    ("Producto", 0.55, Align.LEFT),
    ("Total", 0.30, Align.RIGHT),
)

PRODUCT_NAME_LENGTH = 15
TICKET_NUMBER_DIGITS = 6
FEED_LINES = 3


def _style(**attrs) -> PrintDirective:
    return PrintDirective(kind=DirectiveKind.STYLE, **attrs)


def _text(text: str) -> PrintDirective:
    return PrintDirective(kind=DirectiveKind.TEXT, text=text)


class ReceiptFormatter:
    """
    Turns a sale into the ordered list of directives for a thermal printer.

    The formatter never touches the printer; its output is a plain list
    that a printer connection replays. Given the same sale and timestamp it
    always produces the same directives.
    """

    def __init__(
        self,
        header: Sequence[str],
        subheader: Sequence[str],
        footer: Sequence[str],
        width: int = 48,
        currency_symbol: str = "$",
    ):
        self.header = list(header)
        self.subheader = list(subheader)
        self.footer = list(footer)
        self.width = width
        self.currency_symbol = currency_symbol

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReceiptFormatter":
        return cls(
            header=settings.RECEIPT_HEADER,
            subheader=settings.RECEIPT_SUBHEADER,
            footer=settings.RECEIPT_FOOTER,
            width=settings.RECEIPT_WIDTH,
            currency_symbol=settings.CURRENCY_SYMBOL,
        )

    @property
    def rule(self) -> str:
        return "-" * self.width

    def money(self, amount: float) -> str:
        return f"{self.currency_symbol}{amount:.2f}"

    def column_widths(self) -> List[int]:
        widths = [int(self.width * share) for _, share, _ in TABLE_COLUMNS[:-1]]
        widths.append(self.width - sum(widths))
        return widths

    def table_row(self, cells: Sequence[str]) -> str:
        """
        Lay out one row of the item table at fixed column widths.

        Quantity and amount are never truncated. When either is wider than
        its column, the product column gives up the space; if nothing is
        left, the row runs past the receipt width.
        """
        quantity, name, amount = cells
        quantity_width, _, amount_width = self.column_widths()

        quantity = quantity.ljust(quantity_width - 1) + " "
        amount = " " + amount.rjust(amount_width - 1)
        name_width = max(self.width - len(quantity) - len(amount), 0)
        return quantity + name[:name_width].ljust(name_width) + amount

    def format_receipt(
        self,
        sale_id: int,
        total: float,
        items: Sequence[SaleLine],
        printed_at: datetime,
    ) -> List[PrintDirective]:
        """
        Build the directives for a sale ticket.

        Args:
            sale_id: Ticket number
            total: Amount charged
            items: Lines to print (name, quantity, unit price)
            printed_at: Timestamp printed on the ticket

        Returns:
            Ordered directives, ending with a paper feed and a cut
        """
        directives = [_style(align=Align.CENTER, bold=True, size=2)]
        directives += [_text(line) for line in self.header]
        directives.append(_style(size=1, bold=False))
        directives += [_text(line) for line in self.subheader]
        directives.append(_text(self.rule))

        directives.append(_style(align=Align.LEFT))
        directives.append(_text(f"Ticket: #{str(sale_id).zfill(TICKET_NUMBER_DIGITS)}"))
        directives.append(_text(f"Fecha: {printed_at.strftime('%d/%m/%Y %H:%M:%S')}"))
        directives.append(_text(self.rule))

        directives.append(_text(self.table_row([header for header, _, _ in TABLE_COLUMNS])))
        for item in items:
            directives.append(
                _text(
                    self.table_row(
                        [
                            str(item.quantity),
                            item.name[:PRODUCT_NAME_LENGTH],
                            self.money(item.price * item.quantity),
                        ]
                    )
                )
            )

        directives.append(_text(self.rule))
        directives.append(_style(align=Align.RIGHT, size=1, bold=True))
        directives.append(_text(f"TOTAL: {self.money(total)}"))
        directives.append(_style(bold=False, align=Align.CENTER))
        directives.append(_text(self.rule))
        directives += [_text(line) for line in self.footer]
        directives.append(PrintDirective(kind=DirectiveKind.FEED, lines=FEED_LINES))
        directives.append(PrintDirective(kind=DirectiveKind.CUT))
        return directives

    def drawer_pulse(self, pin: int = 2) -> List[PrintDirective]:
        """Directives that kick the cash drawer connected to ``pin``."""
        return [PrintDirective(kind=DirectiveKind.CASHDRAW, pin=pin)]
