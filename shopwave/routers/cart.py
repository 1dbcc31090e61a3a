# shopwave/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from shopwave.core.auth import require_auth
from shopwave.database import get_session
from shopwave.models.user import User
from shopwave.repositories.cart_repo import CartRepository
from shopwave.repositories.product_repo import ProductRepository
from shopwave.schemas.cart import CartRead, CartItemCreate, CartItemDelete, CartItemSet
from shopwave.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.get("", response_model=CartRead)
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get the current user's cart, creating an empty one on first visit.
    """
    return service.get_or_create_cart(session, current_user.id)


@router.post("", response_model=CartRead)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Add a product to the current user's cart.

    Adding a product already in the cart increases its quantity.
    Returns the updated cart.
    """
    return service.add_item(
        session, current_user.id, payload.product_id, payload.quantity
    )


@router.put("", response_model=CartRead)
def set_cart_quantity(
    payload: CartItemSet,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Set the quantity of a product in the cart (creates the line if missing).

    Returns the updated cart.
    """
    return service.set_quantity(
        session, current_user.id, payload.product_id, payload.quantity
    )


@router.delete("", response_model=CartRead)
def remove_cart_item(
    payload: CartItemDelete,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Remove a product from the cart.

    Returns the updated cart.
    """
    return service.remove_item(session, current_user.id, payload.product_id)
