# shopwave/services/cart_service.py
import logging

from sqlmodel import Session

from shopwave.core.errors import (
    ItemNotFound,
    NotAuthenticated,
    ProductNotFound,
    ValidationFailed,
)
from shopwave.models.cart import MAX_QUANTITY, Cart
from shopwave.repositories.cart_repo import CartRepository
from shopwave.repositories.product_repo import ProductRepository
from shopwave.schemas.cart import CartItemRead, CartProductRead, CartRead

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - one cart per user, created on first access
      - validate product ids and quantities
      - one line per product: repeated adds increase the quantity
      - compute cart totals for the response
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    @staticmethod
    def _require_user(user_id: str | None) -> str:
        if not user_id:
            raise NotAuthenticated()
        return user_id

    @staticmethod
    def _clean_product_id(product_id: str | None) -> str:
        if product_id is None or not str(product_id).strip():
            raise ValidationFailed("Product ID is required")
        return str(product_id).strip()

    @staticmethod
    def _check_quantity(quantity) -> int:
        # bool is an int subclass; True is not a quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")
        if quantity > MAX_QUANTITY:
            raise ValidationFailed(f"Quantity must be at most {MAX_QUANTITY}")
        return quantity

    def _get_valid_product(self, session: Session, product_id: str):
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise ProductNotFound()
        return product

    def _read_cart(self, session: Session, cart: Cart) -> CartRead:
        items: list[CartItemRead] = []
        total_qty = 0
        total_price = 0.0

        for item, product in self.cart_repo.list_lines(session, cart.id):
            price = float(product.price)
            total_qty += item.quantity
            total_price += price * item.quantity
            items.append(
                CartItemRead(
                    id=item.id,
                    quantity=item.quantity,
                    product=CartProductRead(
                        id=product.id,
                        name=product.name,
                        price=price,
                        image_url=product.image_url,
                    ),
                )
            )

        return CartRead(
            id=cart.id,
            user_id=cart.user_id,
            items=items,
            total_quantity=total_qty,
            total_price=round(total_price, 2),
        )

    # ---- public operations ----

    def get_or_create_cart(self, session: Session, user_id: str | None) -> CartRead:
        """
        Return the user's cart with product details.

        The cart row is inserted on first access, so this read
        may perform a write.
        """
        user_id = self._require_user(user_id)
        cart = self.cart_repo.get_or_create(session, user_id)
        return self._read_cart(session, cart)

    def add_item(
        self,
        session: Session,
        user_id: str | None,
        product_id: str,
        quantity: int = 1,
    ) -> CartRead:
        """
        Add `quantity` units of a product to the user's cart.

        Rules:
          - product must exist in the catalog
          - quantity must be a positive integer
          - the resulting line quantity may not exceed MAX_QUANTITY
          - an existing line is incremented, never duplicated
        """
        user_id = self._require_user(user_id)
        product_id = self._clean_product_id(product_id)
        quantity = self._check_quantity(quantity)
        self._get_valid_product(session, product_id)

        cart = self.cart_repo.get_or_create(session, user_id)
        existing = self.cart_repo.get_item(session, cart.id, product_id)
        if existing and existing.quantity + quantity > MAX_QUANTITY:
            raise ValidationFailed(f"Quantity must be at most {MAX_QUANTITY}")
        self.cart_repo.add_quantity(session, cart.id, product_id, quantity)
        logger.info("cart %s: +%d x product %s", cart.id, quantity, product_id)

        return self._read_cart(session, cart)

    def set_quantity(
        self,
        session: Session,
        user_id: str | None,
        product_id: str,
        quantity: int,
    ) -> CartRead:
        """
        Set the absolute quantity of a product in the user's cart.

        Single upsert: the line is created if absent and overwritten
        otherwise, so there is no window where the line is missing.
        """
        user_id = self._require_user(user_id)
        product_id = self._clean_product_id(product_id)
        quantity = self._check_quantity(quantity)
        self._get_valid_product(session, product_id)

        cart = self.cart_repo.get_or_create(session, user_id)
        self.cart_repo.set_quantity(session, cart.id, product_id, quantity)
        logger.info("cart %s: product %s set to %d", cart.id, product_id, quantity)

        return self._read_cart(session, cart)

    def remove_item(
        self,
        session: Session,
        user_id: str | None,
        product_id: str,
    ) -> CartRead:
        """
        Remove a product line from the cart and return the updated cart.
        """
        user_id = self._require_user(user_id)
        product_id = self._clean_product_id(product_id)

        cart = self.cart_repo.get_or_create(session, user_id)
        item = self.cart_repo.get_item(session, cart.id, product_id)
        if not item:
            raise ItemNotFound()

        self.cart_repo.delete(session, item)
        logger.info("cart %s: removed product %s", cart.id, product_id)
        return self._read_cart(session, cart)
