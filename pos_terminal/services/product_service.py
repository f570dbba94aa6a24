from sqlalchemy.orm import Session
from typing import Optional, List
import logging

from pos_terminal.models.product import Product
from pos_terminal.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


SEED_PRODUCTS = [
    ProductCreate(name="Impresora Térmica 80mm", price=120.50, stock=50, barcode="8412345678901"),
    ProductCreate(name="Lector de Código de Barras", price=45.00, stock=100, barcode="8412345678902"),
    ProductCreate(name="Cajón de Dinero RJ11", price=60.00, stock=30, barcode="8412345678903"),
    ProductCreate(name='Monitor Táctil 15.6"', price=250.00, stock=20, barcode="8412345678904"),
    ProductCreate(name="Terminal POS All-in-One", price=550.00, stock=15, barcode="8412345678905"),
    ProductCreate(name="Rollo Papel Térmico 80mm", price=2.50, stock=500, barcode="8412345678906"),
]


class ProductService:
    """
    Service class for the product catalog.

    The catalog is read-only over the API. Stock only changes through
    sale commits (see SaleService).
    """

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Product]:
        """Get every product in the catalog, ordered by ID."""
        return self.db.query(Product).order_by(Product.id).all()

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get a product by ID."""
        return self.db.query(Product).filter(Product.id == product_id).first()

    def seed_if_empty(self, products: List[ProductCreate] = None) -> int:
        """
        Populate the catalog with sample products if it has none.

        Args:
            products: Products to insert (defaults to SEED_PRODUCTS)

        Returns:
            Number of products inserted (0 if the catalog already had data)
        """
        if self.db.query(Product).count() > 0:
            return 0

        products = products if products is not None else SEED_PRODUCTS
        for product_data in products:
            self.db.add(Product(**product_data.model_dump()))
        self.db.commit()

        logger.info(f"Seeded catalog with {len(products)} products")
        return len(products)
