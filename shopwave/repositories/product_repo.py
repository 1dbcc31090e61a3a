# shopwave/repositories/product_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from shopwave.models.product import Product


def _like_pattern(term: str) -> str:
    """Wrap a search term for a contains-match, escaping LIKE wildcards."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductRepository:
    """
    Data access layer for the product catalog.

    - Pure DB operations (queries + inserts for seeding).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: str) -> Product | None:
        return session.get(Product, product_id)

    @staticmethod
    def _search_filter(query: str | None):
        if not query:
            return None
        pattern = _like_pattern(query)
        return or_(
            col(Product.name).ilike(pattern, escape="\\"),
            col(Product.description).ilike(pattern, escape="\\"),
        )

    def search(
        self,
        session: Session,
        query: str | None = None,
        skip: int = 0,
        limit: int = 12,
    ) -> list[Product]:
        """
        Newest-first product listing, optionally filtered by a
        case-insensitive match on name or description.
        """
        stmt = select(Product)
        condition = self._search_filter(query)
        if condition is not None:
            stmt = stmt.where(condition)
        stmt = (
            stmt.order_by(col(Product.created_at).desc(), col(Product.id))
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def count(self, session: Session, query: str | None = None) -> int:
        stmt = select(func.count()).select_from(Product)
        condition = self._search_filter(query)
        if condition is not None:
            stmt = stmt.where(condition)
        value = session.exec(stmt).one()
        return int(value or 0)

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product
