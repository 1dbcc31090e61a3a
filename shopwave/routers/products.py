# shopwave/routers/products.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from shopwave.core.config import get_settings
from shopwave.database import get_session
from shopwave.repositories.product_repo import ProductRepository
from shopwave.schemas.product import ProductPage, ProductRead
from shopwave.services.product_service import ProductService

settings = get_settings()

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, per_page=settings.PRODUCTS_PER_PAGE)


@router.get("", response_model=ProductPage)
def list_products(
    session: Session = Depends(get_session),
    q: str | None = None,
    page: int = 1,
):
    """
    Browse the catalog.

    - Public endpoint.
    - `q` searches name and description.
    - Fixed page size, newest products first.
    """
    return service.list_products(session, query=q, page=page)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.

    - Public endpoint.
    """
    return service.get_product(session, product_id)
