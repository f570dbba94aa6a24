from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from pos_terminal.database import Base


class Sale(Base):
    """
    Sale header written once at checkout.

    Attributes:
        id: Ticket number
        total: Amount charged, as sent by the till
        date: Timestamp assigned by the database on insert
    """
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    total = Column(Float, nullable=False)
    date = Column(DateTime, server_default=func.now(), nullable=False)

    items = relationship("SaleItem", back_populates="sale", order_by="SaleItem.id")

    def __repr__(self):
        return f"<Sale(id={self.id}, total={self.total})>"


class SaleItem(Base):
    """
    Line item of a sale. ``price`` is the unit price at the time of sale,
    not a reference to the product's current price.
    """
    __tablename__ = "sale_details"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

    sale = relationship("Sale", back_populates="items")
    product = relationship("Product")

    def __repr__(self):
        return f"<SaleItem(sale_id={self.sale_id}, product_id={self.product_id}, quantity={self.quantity})>"
