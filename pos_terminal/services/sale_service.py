from sqlalchemy.orm import Session
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional, List
import logging

from pos_terminal.models.product import Product
from pos_terminal.models.sale import Sale, SaleItem
from pos_terminal.schemas.sale import SaleCreate, SaleDetail, SaleLine, SaleSummary

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Exception raised when a cart references a product that doesn't exist."""
    pass


class SaleCommitError(Exception):
    """Exception raised when the store rejects a sale; nothing was written."""
    pass


class SaleService:
    """
    Service class for the sale ledger.

    A checkout is committed as a single transaction:

    1. INSERT the sale header (flush to obtain its ID)
    2. For every cart line, INSERT the line item with the unit price
       charged and decrement the product's stock
    3. COMMIT

    Any failure rolls the whole transaction back, so a sale never exists
    without its line items and stock is never decremented for a sale that
    was not recorded.

    The total sent by the till is stored as-is and stock is decremented
    without a sufficiency check; a sale can drive stock below zero.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_sale(self, sale_data: SaleCreate) -> Sale:
        """
        Record a sale and decrement stock atomically.

        Args:
            sale_data: Total and cart lines

        Returns:
            The persisted sale

        Raises:
            ProductNotFoundError: If a cart line references an unknown product
            SaleCommitError: If the database rejects any statement
        """
        try:
            sale = Sale(total=sale_data.total)
            self.db.add(sale)
            self.db.flush()

            for item in sale_data.items:
                self.db.add(
                    SaleItem(
                        sale_id=sale.id,
                        product_id=item.id,
                        quantity=item.quantity,
                        price=item.price,
                    )
                )
                result = self.db.execute(
                    text("UPDATE products SET stock = stock - :quantity WHERE id = :product_id"),
                    {"quantity": item.quantity, "product_id": item.id},
                )
                if result.rowcount == 0:
                    raise ProductNotFoundError(f"Product with ID {item.id} not found")

            self.db.commit()
            self.db.refresh(sale)

            logger.info(
                f"Sale #{sale.id} committed: {len(sale_data.items)} lines, total {sale.total:.2f}"
            )
            return sale

        except ProductNotFoundError as e:
            self.db.rollback()
            logger.warning(f"Sale rejected: {e}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error processing sale: {e}")
            raise SaleCommitError("Failed to process sale") from e

    def list_sales(self) -> List[SaleSummary]:
        """
        Get every sale with the number of line items it has.

        Newest first; sales recorded within the same second are ordered by
        ID, latest first.
        """
        rows = (
            self.db.query(
                Sale.id,
                Sale.total,
                Sale.date,
                func.count(SaleItem.id).label("item_count"),
            )
            .outerjoin(SaleItem, SaleItem.sale_id == Sale.id)
            .group_by(Sale.id, Sale.total, Sale.date)
            .order_by(Sale.date.desc(), Sale.id.desc())
            .all()
        )
        return [SaleSummary.model_validate(row) for row in rows]

    def get_sale(self, sale_id: int) -> Optional[Sale]:
        """Get a sale header by ID."""
        return self.db.query(Sale).filter(Sale.id == sale_id).first()

    def get_sale_detail(self, sale_id: int) -> Optional[SaleDetail]:
        """
        Get a sale with its line items (product name, quantity, unit price
        charged), in the order they were rung up.
        """
        sale = self.get_sale(sale_id)
        if not sale:
            return None

        lines = (
            self.db.query(Product.name, SaleItem.quantity, SaleItem.price)
            .join(Product, SaleItem.product_id == Product.id)
            .filter(SaleItem.sale_id == sale_id)
            .order_by(SaleItem.id)
            .all()
        )

        return SaleDetail(
            id=sale.id,
            total=sale.total,
            date=sale.date,
            items=[SaleLine.model_validate(line) for line in lines],
        )
