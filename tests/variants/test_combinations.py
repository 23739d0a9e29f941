import logging
from dataclasses import replace

from conftest import make_axis, make_combination
from models.catalog import Product
from variants.combinations import CombinationIndex, combination_key, combination_label


def test_combination_key_is_order_independent():
    assert combination_key([22, 11]) == combination_key({11, 22}) == (11, 22)


def test_index_matches_exact_option_sets(tee_product):
    index = CombinationIndex.build(tee_product)
    assert len(index) == 3
    assert index.match([22, 11]).combination_id == 102
    assert index.match([12, 21]) is None
    assert [11, 21] in index


def test_index_rejects_partial_sets(tee_product):
    index = CombinationIndex.build(tee_product)
    assert index.match([11]) is None


def test_extending_returns_combinations_containing_partial_selection(tee_product):
    index = CombinationIndex.build(tee_product)
    ids = sorted(comb.combination_id for comb in index.extending([11]))
    assert ids == [101, 102]
    assert len(index.extending([])) == 3
    assert index.extending([12]) == []


def test_index_skips_inactive_and_malformed_combinations(tee_product, caplog):
    product = replace(
        tee_product,
        combinations=(
            make_combination(1, [11, 21], 10.0, active=False),
            make_combination(2, [11], 10.0),  # wrong cardinality
            make_combination(3, [11, 13], 10.0),  # two options from the same axis
            make_combination(4, [11, 404], 10.0),  # unknown option
            make_combination(5, [13, 22], 10.0),
        ),
    )
    with caplog.at_level(logging.WARNING):
        index = CombinationIndex.build(product)
    assert len(index) == 1
    assert index.match([13, 22]).combination_id == 5
    assert "does not cover one option per axis" in caplog.text


def test_duplicate_option_sets_keep_first(tee_product, caplog):
    product = replace(
        tee_product,
        combinations=(make_combination(1, [11, 21], 10.0), make_combination(2, [21, 11], 99.0)),
    )
    with caplog.at_level(logging.WARNING):
        index = CombinationIndex.build(product)
    assert index.match([11, 21]).combination_id == 1
    assert "keeping the first" in caplog.text


def test_combination_label_uses_axis_order(tee_product):
    assert combination_label(tee_product, [22, 13]) == "Black + L"
    assert combination_label(tee_product, []) == ""



def test_catalog_without_combination_table_has_empty_index():
    color = make_axis(1, "Color", (1, "Red", 0.0, 2))
    size = make_axis(2, "Size", (2, "S", 0.0, 2))
    index = CombinationIndex.build(Product(product_id=1, name="Poncho", base_price=30.0, axes=(color, size)))
    assert len(index) == 0
    assert index.match([1, 2]) is None
    assert index.extending([1]) == []
