"""In-memory product catalog"""

from decimal import Decimal
from typing import Iterable, Optional

from cartcore.models import OptionValue, Product, ProductOption, ProductVariant

DEFAULT_STORE = "DEFAULT"

# Mock product catalog
PRODUCTS: dict[str, Product] = {
    "prod-001": Product(
        id="prod-001",
        store_code=DEFAULT_STORE,
        sku="SONY-WH1000XM5",
        name="Sony WH-1000XM5 Wireless Headphones",
        description="Industry-leading noise cancellation with 30-hour battery life.",
        price=Decimal("349.99"),
        weight=Decimal("0.55"),
        image_url="/static/images/sony-headphones.jpg",
        options=(ProductOption(code="COLOR", name="Color"),),
    ),
    "prod-004": Product(
        id="prod-004",
        store_code=DEFAULT_STORE,
        sku="PATA-BSJKT",
        name="Patagonia Better Sweater Jacket",
        description="Classic fleece jacket made with recycled polyester.",
        price=Decimal("139.00"),
        weight=Decimal("0.80"),
        image_url="/static/images/patagonia-sweater.jpg",
        options=(
            ProductOption(code="SIZE", name="Size", required=True),
            ProductOption(code="GIFTWRAP", name="Gift wrap"),
        ),
    ),
    "prod-005": Product(
        id="prod-005",
        store_code=DEFAULT_STORE,
        sku="NIKE-AM90",
        name="Nike Air Max 90",
        description="Iconic design with Max Air cushioning.",
        price=Decimal("99.00"),
        weight=Decimal("1.20"),
        image_url="/static/images/airmax90.jpg",
        options=(ProductOption(code="SHOESIZE", name="Shoe size", required=True),),
        variants_required=True,
    ),
    "prod-010": Product(
        id="prod-010",
        store_code=DEFAULT_STORE,
        sku="BOOK-ATOMIC-HC",
        name="Atomic Habits by James Clear",
        description="An Easy & Proven Way to Build Good Habits & Break Bad Ones. Hardcover.",
        price=Decimal("24.99"),
        weight=Decimal("0.60"),
        image_url="/static/images/atomic-habits.jpg",
    ),
}

OPTION_VALUES: dict[str, OptionValue] = {
    v.id: v
    for v in [
        OptionValue(id="ov-001-black", product_id="prod-001", option_code="COLOR", code="black", name="Black"),
        OptionValue(
            id="ov-001-silver", product_id="prod-001", option_code="COLOR", code="silver", name="Silver",
            price_delta=Decimal("20.00"),
        ),
        OptionValue(id="ov-004-m", product_id="prod-004", option_code="SIZE", code="m", name="M"),
        OptionValue(
            id="ov-004-xl", product_id="prod-004", option_code="SIZE", code="xl", name="XL",
            price_delta=Decimal("10.00"), weight_delta=Decimal("0.15"),
        ),
        OptionValue(
            id="ov-004-wrap", product_id="prod-004", option_code="GIFTWRAP", code="yes", name="Gift wrapped",
            price_delta=Decimal("4.50"), weight_delta=Decimal("0.10"),
        ),
        OptionValue(id="ov-005-nine", product_id="prod-005", option_code="SHOESIZE", code="nine", name="9"),
        OptionValue(
            id="ov-005-ten", product_id="prod-005", option_code="SHOESIZE", code="ten", name="10",
            price_delta=Decimal("20.00"),
        ),
    ]
}

VARIANTS: dict[str, list[ProductVariant]] = {
    "prod-005": [
        ProductVariant(
            id="var-005-9", product_id="prod-005", sku="NIKE-AM90-9",
            option_value_ids={"ov-005-nine"}, price=Decimal("99.00"),
        ),
        ProductVariant(
            id="var-005-10", product_id="prod-005", sku="NIKE-AM90-10",
            option_value_ids={"ov-005-ten"}, price=Decimal("119.00"), weight=Decimal("1.25"),
        ),
    ],
}


class ProductDatabase:
    """In-memory catalog implementing the cart engine's catalog lookup"""

    def __init__(
        self,
        products: Optional[dict[str, Product]] = None,
        option_values: Optional[dict[str, OptionValue]] = None,
        variants: Optional[dict[str, list[ProductVariant]]] = None,
    ):
        self.products = dict(PRODUCTS if products is None else products)
        self.option_values = dict(OPTION_VALUES if option_values is None else option_values)
        self.variants = {
            k: list(v) for k, v in (VARIANTS if variants is None else variants).items()
        }

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def get_variants(self, product_id: str) -> list[ProductVariant]:
        """Get the explicit variants of a product"""
        return list(self.variants.get(product_id, []))

    def get_option_values(self, ids: Iterable[str]) -> list[OptionValue]:
        """Get option values by ID, skipping unknown IDs"""
        return [self.option_values[i] for i in ids if i in self.option_values]

    def put_product(self, product: Product) -> None:
        self.products[product.id] = product

    def put_option_value(self, value: OptionValue) -> None:
        self.option_values[value.id] = value

    def put_variant(self, variant: ProductVariant) -> None:
        """Add a variant, replacing one with the same ID"""
        variants = [v for v in self.variants.get(variant.product_id, []) if v.id != variant.id]
        variants.append(variant)
        self.variants[variant.product_id] = variants

    def delete_product(self, product_id: str) -> bool:
        """Delete a product with its variants and option values"""
        if product_id not in self.products:
            return False
        del self.products[product_id]
        self.variants.pop(product_id, None)
        self.option_values = {
            k: v for k, v in self.option_values.items() if v.product_id != product_id
        }
        return True
