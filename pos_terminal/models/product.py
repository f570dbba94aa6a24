from sqlalchemy import Column, Integer, String, Float

from pos_terminal.database import Base


class Product(Base):
    """
    Product model representing items available for sale.

    Attributes:
        id: Unique identifier for the product
        name: Product name
        price: Current unit price
        stock: Units on hand; decremented on every sale and allowed to go negative
        barcode: Optional unique barcode
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    barcode = Column(String(64), unique=True, nullable=True)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock})>"
