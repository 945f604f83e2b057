"""Tests for outfit piece conflict resolution."""

from logic.coherence import CoherenceValidator
from models.taxonomy import Category


def _validator() -> CoherenceValidator:
    return CoherenceValidator()


def test_dress_removes_separate_bottoms() -> None:
    """A one-piece garment wins over separates."""

    result = _validator().validate(["red dress", "blue jeans"])

    assert result.is_valid
    assert result.validated_pieces == ["red dress"]
    assert result.removed_pieces == ["blue jeans"]
    assert result.reason == "Removed 1 conflicting piece(s)"


def test_one_piece_keeps_layers_accessories_and_unknowns() -> None:
    pieces = ["black jumpsuit", "white blouse", "denim jacket", "silver watch", "feather boa", "pleated skirt"]

    result = _validator().validate(pieces)

    assert result.validated_pieces == ["black jumpsuit", "denim jacket", "silver watch", "feather boa"]
    assert result.removed_pieces == ["white blouse", "pleated skirt"]
    categories = {_validator().categorize(piece) for piece in result.validated_pieces}
    assert Category.TOP not in categories
    assert Category.BOTTOM not in categories


def test_separates_keep_layers_unchanged() -> None:
    """Layer items are never removed when no one-piece is present."""

    pieces = ["white blouse", "black trousers", "leather jacket"]

    result = _validator().validate(pieces)

    assert result.validated_pieces == pieces
    assert result.removed_pieces == []
    assert result.reason == "All pieces are compatible"


def test_no_conflict_returns_input_unchanged() -> None:
    pieces = ["  Leather JACKET ", "gold necklace", "mystery item"]

    result = _validator().validate(pieces)

    assert result.validated_pieces == pieces
    assert result.validated_pieces is not pieces


def test_empty_piece_list_is_not_valid() -> None:
    result = _validator().validate([])

    assert not result.is_valid
    assert result.reason == "No pieces provided"


def test_negative_prompt_for_one_piece_outfit() -> None:
    negative = _validator().negative_prompt_for(["red dress", "black heels"])
    terms = negative.split(", ")

    assert "separate jeans" in terms
    assert "two-piece outfit" in terms
    assert "skirt" not in terms
    assert terms[-6:] == [
        "wearing multiple dresses",
        "wearing dress and pants",
        "wearing pants and skirt",
        "nude",
        "naked",
        "underwear only",
    ]


def test_negative_prompt_branches_on_skirt() -> None:
    with_pants = _validator().negative_prompt_for(["white blouse", "black trousers"]).split(", ")
    with_skirt = _validator().negative_prompt_for(["white blouse", "pleated skirt"]).split(", ")

    assert "skirt" in with_pants and "pants" not in with_pants
    assert "pants" in with_skirt and "jeans" in with_skirt
    assert "dress" in with_pants and "dress" in with_skirt


def test_negative_prompt_top_only_excludes_one_pieces() -> None:
    terms = _validator().negative_prompt_for(["silk blouse"]).split(", ")

    assert terms[:3] == ["dress", "gown", "jumpsuit"]


def test_build_coherent_prompt_uses_validated_pieces() -> None:
    prompt = _validator().build_coherent_prompt(
        ["red dress", "blue jeans"], colors=["red"], style="evening", include_negative_prompt=True
    )

    assert prompt["prompt"] == "wearing red dress in red colors, evening style"
    assert "separate pants" in prompt["negative_prompt"]


def test_build_coherent_prompt_without_pieces_defaults() -> None:
    assert _validator().build_coherent_prompt([]) == {"prompt": "casual outfit", "negative_prompt": None}


def test_compatibility_helpers() -> None:
    validator = _validator()

    assert validator.are_compatible(["white blouse", "black trousers"])
    assert not validator.are_compatible(["gown", "t-shirt"])
    assert validator.filter_conflicting_pieces(["gown", "t-shirt"]) == ["gown"]
