# shopwave/schemas/product.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: float
    image_url: str = Field(alias="imageUrl")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ProductPage(SQLModel):
    """
    One page of catalog results plus paging metadata.
    """

    model_config = ConfigDict(populate_by_name=True)

    products: list[ProductRead]
    total_products: int = Field(alias="totalProducts")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    per_page: int = Field(alias="perPage")
    search_query: str = Field(default="", alias="searchQuery")
