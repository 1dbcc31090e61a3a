# shopwave/services/product_service.py
import math

from sqlmodel import Session

from shopwave.core.errors import ProductNotFound
from shopwave.models.product import Product
from shopwave.repositories.product_repo import ProductRepository
from shopwave.schemas.product import ProductPage, ProductRead

# largest OFFSET we hand to the database (fits a 32-bit signed int)
MAX_OFFSET = 2_147_483_647


def to_product_read(product: Product) -> ProductRead:
    return ProductRead(
        id=product.id,
        name=product.name,
        description=product.description,
        price=float(product.price),
        image_url=product.image_url,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


class ProductService:
    """
    Catalog browsing: search + fixed-size pagination, single product lookup.
    """

    def __init__(self, repo: ProductRepository, per_page: int = 12):
        self.repo = repo
        self.per_page = per_page

    def list_products(
        self,
        session: Session,
        query: str | None = None,
        page: int = 1,
    ) -> ProductPage:
        """
        One page of products, newest first.

        - `query` matches name or description (case-insensitive).
        - pages below 1 are treated as page 1; pages past the end are empty.
        - pages beyond the largest offset the database accepts are clamped
          to the last addressable page.
        """
        query = (query or "").strip()
        max_page = MAX_OFFSET // self.per_page + 1
        current_page = min(max(1, page), max_page)

        products = self.repo.search(
            session,
            query=query or None,
            skip=(current_page - 1) * self.per_page,
            limit=self.per_page,
        )
        total = self.repo.count(session, query=query or None)

        return ProductPage(
            products=[to_product_read(p) for p in products],
            total_products=total,
            current_page=current_page,
            total_pages=math.ceil(total / self.per_page),
            per_page=self.per_page,
            search_query=query,
        )

    def get_product(self, session: Session, product_id: str) -> ProductRead:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise ProductNotFound()
        return to_product_read(product)
