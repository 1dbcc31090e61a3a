# shopwave/repositories/cart_repo.py
import uuid
from datetime import datetime, timezone

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session, select

from shopwave.models.cart import Cart, CartItem
from shopwave.models.product import Product

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class CartRepository:
    """
    Data access layer for carts and cart_items.

    - Pure DB operations, no FastAPI, no business rules.
    - Every write that must respect a unique key is a single
      INSERT ... ON CONFLICT statement, never a select-then-insert.
    """

    @staticmethod
    def _insert_for(session: Session):
        dialect = session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Atomic upsert is not supported on dialect {dialect!r}")
        return insert

    # ---- Carts ----

    def get_or_create(self, session: Session, user_id: str) -> Cart:
        """
        Return the user's cart, inserting it first if missing.

        Concurrent first requests for the same user both end up
        reading the single row that won the insert.
        """
        insert = self._insert_for(session)
        stmt = (
            insert(Cart.__table__)
            .values(id=_new_id(), user_id=user_id, created_at=_now())
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        session.execute(stmt)
        session.commit()
        return session.exec(select(Cart).where(Cart.user_id == user_id)).one()

    # ---- Cart items ----

    def list_lines(
        self,
        session: Session,
        cart_id: str,
    ) -> list[tuple[CartItem, Product]]:
        """
        Cart items joined to their product, in insertion order.
        """
        stmt = (
            select(CartItem, Product)
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        return list(session.exec(stmt).all())

    def get_item(
        self, session: Session, cart_id: str, product_id: str
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def _upsert_item(
        self,
        session: Session,
        cart_id: str,
        product_id: str,
        quantity: int,
        increment: bool,
    ) -> None:
        insert = self._insert_for(session)
        table = CartItem.__table__
        stmt = insert(table).values(
            id=_new_id(),
            cart_id=cart_id,
            product_id=product_id,
            quantity=quantity,
            created_at=_now(),
        )
        if increment:
            new_quantity = table.c.quantity + stmt.excluded.quantity
        else:
            new_quantity = stmt.excluded.quantity
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "product_id"],
            set_={"quantity": new_quantity},
        )
        session.execute(stmt)
        session.commit()

    def add_quantity(
        self, session: Session, cart_id: str, product_id: str, quantity: int
    ) -> None:
        """Insert the line with `quantity`, or add `quantity` to the stored one."""
        self._upsert_item(session, cart_id, product_id, quantity, increment=True)

    def set_quantity(
        self, session: Session, cart_id: str, product_id: str, quantity: int
    ) -> None:
        """Insert the line with `quantity`, or overwrite the stored one."""
        self._upsert_item(session, cart_id, product_id, quantity, increment=False)

    def delete(self, session: Session, item: CartItem) -> None:
        session.delete(item)
        session.commit()
