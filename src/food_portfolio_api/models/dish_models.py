"""Dish catalog models.

These models represent menu items stored in the ``dishes`` table and the
request bodies accepted by the portfolio endpoints.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

# Serialize prices as JSON numbers, the way the database returns them
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class DishCategory(str, Enum):
    """Enumeration of dish categories."""

    APPETIZERS = "appetizers"
    MAINS = "mains"
    DESSERTS = "desserts"
    DRINKS = "drinks"
    SPECIALS = "specials"


class CategoryInfo(BaseModel):
    """Display descriptor for a dish category."""

    id: DishCategory
    name: str
    description: str


DISH_CATEGORIES: list[CategoryInfo] = [
    CategoryInfo(
        id=DishCategory.APPETIZERS,
        name="Appetizers",
        description="Start your meal with these delicious options",
    ),
    CategoryInfo(id=DishCategory.MAINS, name="Main Courses", description="Our signature main dishes"),
    CategoryInfo(
        id=DishCategory.DESSERTS,
        name="Desserts",
        description="Sweet endings to your perfect meal",
    ),
    CategoryInfo(
        id=DishCategory.DRINKS,
        name="Beverages",
        description="Refreshing drinks and specialty cocktails",
    ),
    CategoryInfo(
        id=DishCategory.SPECIALS,
        name="Chef Specials",
        description="Limited time seasonal offerings",
    ),
]


class Dish(BaseModel):
    """Dish record as stored in the database."""

    id: str = Field(..., description="Unique identifier assigned by the database")
    title: str = Field(..., description="Dish title")
    description: str | None = Field(None, description="Dish description")
    category: DishCategory = Field(..., description="Menu category")
    image_url: str | None = Field(None, description="URL to dish image")
    price: Price | None = Field(None, description="Dish price")
    ingredients: list[str] = Field(default_factory=list, description="Ordered ingredient list")
    is_featured: bool = Field(default=False, description="Whether dish is featured")
    is_available: bool = Field(default=True, description="Whether dish is currently available")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")

    @field_validator("ingredients", mode="before")
    @classmethod
    def default_ingredients(cls, v: Any) -> Any:
        """Treat a null ingredient column as an empty list."""
        return [] if v is None else v

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Dish":
        """Create a Dish from a database row.

        Args:
            record: Row dictionary returned by the store

        Returns:
            Dish: Parsed model instance
        """
        return cls.model_validate(record)


class DishCreate(BaseModel):
    """Request body for creating a dish.

    Required fields are checked by the handler so it can answer with a
    specific message; this model only enforces types and the category enum.
    """

    title: str | None = None
    description: str | None = None
    category: DishCategory | None = None
    image_url: str | None = None
    price: Decimal | None = Field(None, ge=0)
    ingredients: list[str] | None = None
    is_featured: bool | None = None
    is_available: bool | None = None

    def to_record(self, timestamp: datetime) -> dict[str, Any]:
        """Normalize into the full column set for insertion.

        Args:
            timestamp: Value used for both created_at and updated_at

        Returns:
            dict: Store-ready row with defaults filled in
        """
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category.value if self.category else None,
            "image_url": self.image_url or None,
            "price": str(self.price) if self.price is not None else None,
            "ingredients": self.ingredients or [],
            "is_featured": bool(self.is_featured),
            "is_available": self.is_available is not False,
            "created_at": timestamp.isoformat(),
            "updated_at": timestamp.isoformat(),
        }


class DishUpdate(BaseModel):
    """Request body for a partial dish update.

    ``id`` and timestamps are not accepted; unknown fields are dropped.
    Title and description may be omitted but not emptied.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    category: DishCategory | None = None
    image_url: str | None = None
    price: Decimal | None = Field(None, ge=0)
    ingredients: list[str] | None = None
    is_featured: bool | None = None
    is_available: bool | None = None

    @field_validator("title", "description")
    @classmethod
    def reject_cleared_text(cls, v: str | None) -> str:
        """Title and description cannot be set to null."""
        if v is None:
            raise ValueError("cannot be null")
        return v

    def to_changes(self) -> dict[str, Any]:
        """Return only the fields the caller explicitly set."""
        return self.model_dump(exclude_unset=True, mode="json")
