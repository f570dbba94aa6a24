from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from pos_terminal.database import get_db
from pos_terminal.services.product_service import ProductService
from pos_terminal.schemas.product import ProductResponse
from pos_terminal.schemas.sale import MAX_DB_INT

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List all products",
    description="Get the whole catalog with current stock."
)
def list_products(db: Session = Depends(get_db)):
    """Get every product for the sales grid."""
    service = ProductService(db)
    return service.get_all()


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get a single product with its current stock."
)
def get_product(
    product_id: int = Path(..., ge=1, le=MAX_DB_INT),
    db: Session = Depends(get_db)
):
    service = ProductService(db)
    product = service.get_by_id(product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )

    return product
