import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import variants`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from models.catalog import Option, Product, VariantCombination, VariationAxis  # noqa: E402


def make_axis(axis_id: int, name: str, *options: tuple) -> VariationAxis:
    """Build an axis from (option_id, name, adjustment, stock[, image]) tuples."""
    built = []
    for spec in options:
        option_id, option_name, adjustment, stock = spec[:4]
        image = spec[4] if len(spec) > 4 else None
        built.append(
            Option(
                option_id=option_id,
                axis_id=axis_id,
                name=option_name,
                price_adjustment=adjustment,
                stock_quantity=stock,
                image_url=image,
            )
        )
    return VariationAxis(axis_id=axis_id, name=name, options=tuple(built))


def make_combination(combination_id: int, option_ids, price: float, stock=None, **kwargs) -> VariantCombination:
    return VariantCombination(
        combination_id=combination_id, option_ids=frozenset(option_ids), price=price, stock=stock, **kwargs
    )


@pytest.fixture
def tee_product() -> Product:
    """Two axes (Color x Size), three of six combinations defined."""
    color = make_axis(
        1,
        "Color",
        (11, "Red", 0.0, 6, "https://cdn.example.com/red.jpg"),
        (12, "Blue", 20.0, 0),
        (13, "Black", 0.0, 10),
    )
    size = make_axis(2, "Size", (21, "M", 0.0, 8), (22, "L", 30.0, 5))
    return Product(
        product_id=42,
        name="Organic Cotton Tee",
        slug="organic-cotton-tee",
        base_price=499.0,
        track_inventory=True,
        axes=(color, size),
        combinations=(
            make_combination(101, [11, 21], 449.0, 4, name="Red + M"),
            make_combination(102, [11, 22], 489.0, 2, name="Red + L"),
            make_combination(103, [13, 21], 459.0, None),
        ),
        images=("https://cdn.example.com/front.jpg", "https://cdn.example.com/back.jpg"),
        tax_rate=5.0,
        low_stock_threshold=3,
    )


@pytest.fixture
def single_color_product() -> Product:
    """One Color axis, Blue sold out, one combination per option."""
    color = make_axis(1, "Color", (1, "Red", 0.0, 3), (2, "Blue", 0.0, 0))
    return Product(
        product_id=7,
        name="Enamel Mug",
        base_price=100.0,
        track_inventory=True,
        axes=(color,),
        combinations=(
            make_combination(201, [1], 100.0, 3),
            make_combination(202, [2], 100.0, 0),
        ),
    )


@pytest.fixture
def sparse_grid_product() -> Product:
    """Color x Size, four options each, only two combinations defined."""
    color = make_axis(1, "Color", *[(10 + i, name, 0.0, 5) for i, name in enumerate(["Red", "Blue", "Green", "Black"])])
    size = make_axis(2, "Size", *[(20 + i, name, 0.0, 5) for i, name in enumerate(["S", "M", "L", "XL"])])
    return Product(
        product_id=8,
        name="Rain Jacket",
        base_price=200.0,
        track_inventory=True,
        axes=(color, size),
        combinations=(
            make_combination(301, [10, 20], 210.0, 2),
            make_combination(302, [11, 21], 220.0, 1),
        ),
    )


@pytest.fixture
def simple_sale_product() -> Product:
    """No axes, on sale, inventory not tracked."""
    return Product(product_id=9, name="Gift Card", base_price=100.0, sale_price=80.0, track_inventory=False)


@pytest.fixture
def legacy_size_product() -> Product:
    """A single Size axis and no combination table."""
    size = make_axis(5, "Size", (51, "S", 0.0, 4), (52, "M", 5.0, 4), (53, "L", 10.0, 4))
    return Product(product_id=10, name="Wool Socks", base_price=50.0, track_inventory=True, axes=(size,))
