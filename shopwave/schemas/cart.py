# shopwave/schemas/cart.py
from pydantic import ConfigDict, StrictInt, field_validator
from sqlmodel import SQLModel, Field

from shopwave.models.cart import MAX_QUANTITY


class CartItemBase(SQLModel):
    """
    Base fields for cart mutation payloads.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")

    @field_validator("product_id")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Product ID is required")
        return v


class CartItemCreate(CartItemBase):
    """
    Payload for adding to cart. Quantity defaults to 1.

    Quantity must be a JSON integer: true, "3" and 1.5 are rejected.
    """

    quantity: StrictInt = Field(default=1, ge=1, le=MAX_QUANTITY)


class CartItemSet(CartItemBase):
    """
    Payload for setting the absolute quantity of a cart line.
    """

    quantity: StrictInt = Field(ge=1, le=MAX_QUANTITY)


class CartItemDelete(CartItemBase):
    """
    Payload for removing a product from the cart.
    """

    pass


class CartProductRead(SQLModel):
    """
    Product details embedded in a cart line.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    price: float
    image_url: str = Field(alias="imageUrl")


class CartItemRead(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    quantity: int
    product: CartProductRead


class CartRead(SQLModel):
    """
    Full cart response model with totals.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    items: list[CartItemRead]
    total_quantity: int = Field(alias="totalQuantity")
    total_price: float = Field(alias="totalPrice")
