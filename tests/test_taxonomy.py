"""Tests for the garment taxonomy tables and categorization priority."""

import pytest

from models.taxonomy import (
    CATEGORY_PRIORITY,
    TAXONOMY,
    Category,
    Taxonomy,
    is_bottom_type,
    is_top_type,
)


@pytest.mark.parametrize(
    "piece, expected",
    [
        ("Red Dress", Category.ONE_PIECE),
        ("  jumpsuit ", Category.ONE_PIECE),
        ("white blouse", Category.TOP),
        ("black trousers", Category.BOTTOM),
        ("leather jacket", Category.LAYER),
        ("gold necklace", Category.ACCESSORY),
        ("feather boa", Category.UNKNOWN),
    ],
)
def test_categorize_assigns_expected_category(piece: str, expected: Category) -> None:
    assert TAXONOMY.categorize(piece) is expected


def test_priority_prefers_one_piece_over_top() -> None:
    """A shirt dress mentions a top keyword but is still a one-piece garment."""

    assert TAXONOMY.categorize("striped shirt dress") is Category.ONE_PIECE
    assert TAXONOMY.categorize("tank top") is Category.TOP


def test_unindexed_pieces_use_the_taxonomy_priority() -> None:
    """Pieces missing from the index fall back to the taxonomy's own priority scan."""

    layers_only = Taxonomy(priority=((Category.LAYER, frozenset({"jacket"})),), keyword_index={})

    assert layers_only.categorize("Denim Jacket ") is Category.LAYER
    assert layers_only.categorize("red dress") is Category.UNKNOWN
    assert TAXONOMY.categorize("white dress shirt") is Category.ONE_PIECE


def test_keyword_index_agrees_with_priority_scan() -> None:
    """Exact keyword lookups never disagree with the substring scan."""

    for keyword, indexed in TAXONOMY.keyword_index.items():
        scanned = next(
            (category for category, keywords in CATEGORY_PRIORITY if any(k in keyword for k in keywords)),
            Category.UNKNOWN,
        )
        assert indexed is scanned, keyword


def test_taxonomy_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        TAXONOMY.keyword_index["cape"] = Category.TOP  # type: ignore[index]
    with pytest.raises(AttributeError):
        TAXONOMY.keyword_index.clear()  # type: ignore[attr-defined]


def test_detected_type_helpers() -> None:
    assert is_top_type("Cropped Tee")
    assert is_top_type("polo shirt")
    assert not is_top_type("jeans")
    assert is_bottom_type("wide leg Trousers")
    assert is_bottom_type("leggings")
    assert not is_bottom_type("blazer")
