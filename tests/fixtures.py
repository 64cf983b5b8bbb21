"""Shared test fixtures: a small catalog and cart builders used across tests."""

from shopstate import AddItem, CartLine, CartState, Product, cart_total


# =============================================================================
# Catalog records
# =============================================================================

RED_SHOE = Product(
    id=1,
    title="Red Shoe",
    description="Running shoe in red",
    brand="Stride",
    category="shoes",
    price=50,
    discount_percentage=10,
    rating=4,
    stock=12,
    thumbnail="https://img.example/red-shoe.png",
    images=("https://img.example/red-shoe-1.png",),
)

BLUE_HAT = Product(
    id=2,
    title="Blue Hat",
    description="Wool hat",
    brand="Capstone",
    category="hats",
    price=10,
    rating=5,
    stock=3,
    thumbnail="https://img.example/blue-hat.png",
)

GREEN_SCARF = Product(
    id=3,
    title="green scarf",
    description="Soft scarf, pairs with any hat",
    brand="Capstone",
    category="accessories",
    price=25,
    rating=4,
    stock=0,
)

ECLAIR_SHOE = Product(
    id=4,
    title="Éclair Shoe",
    description="Patent leather",
    brand="Patisserie",
    category="shoes",
    price=50,
    rating=3.5,
)

SCENARIO_CATALOG = (RED_SHOE, BLUE_HAT)
FULL_CATALOG = (RED_SHOE, BLUE_HAT, GREEN_SCARF, ECLAIR_SHOE)

RAW_RECORDS = [
    {
        "id": 1,
        "title": "Red Shoe",
        "description": "Running shoe in red",
        "brand": "Stride",
        "category": "shoes",
        "price": 50,
        "discountPercentage": 10,
        "rating": 4,
        "stock": 12,
        "thumbnail": "https://img.example/red-shoe.png",
        "images": ["https://img.example/red-shoe-1.png"],
    },
    {
        "id": 2,
        "title": "Blue Hat",
        "description": "Wool hat",
        "brand": "Capstone",
        "category": "hats",
        "price": 10,
        "rating": 5,
        "stock": 3,
        "thumbnail": "https://img.example/blue-hat.png",
    },
]


# =============================================================================
# Cart builders
# =============================================================================


def add(product_id: int, unit_price: float = 20.0, title: str = "") -> AddItem:
    """AddItem intent with defaults for fields a test doesn't care about."""
    return AddItem(
        product_id=product_id,
        title=title or f"product-{product_id}",
        unit_price=unit_price,
    )


def cart_with(*lines: CartLine) -> CartState:
    """CartState holding ``lines`` with a consistent total."""
    return CartState(lines=tuple(lines), total=cart_total(lines))
