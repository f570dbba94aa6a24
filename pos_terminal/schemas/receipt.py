from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
import enum

from pos_terminal.schemas.sale import SaleLine


class DirectiveKind(str, enum.Enum):
    """Kinds of printer directive produced by the receipt formatter."""
    STYLE = "style"
    TEXT = "text"
    FEED = "feed"
    CUT = "cut"
    CASHDRAW = "cashdraw"


class Align(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class PrintDirective(BaseModel):
    """
    A single printer instruction.

    STYLE directives only carry the attributes they change; unset
    attributes (None) keep their current value on the printer.
    """
    kind: DirectiveKind
    text: Optional[str] = None
    align: Optional[Align] = None
    bold: Optional[bool] = None
    size: Optional[int] = Field(None, ge=1, le=2, description="1 = normal, 2 = double width and height")
    lines: Optional[int] = None
    pin: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class PrintRequest(BaseModel):
    """Schema for printing a receipt from a caller-supplied sale."""
    sale_id: int = Field(..., alias="saleId")
    total: float
    items: list[SaleLine]

    model_config = ConfigDict(populate_by_name=True)


class PrinterResponse(BaseModel):
    success: bool = True
    message: str
