import pytest

from thought_threads.normalizer import STOP_WORDS, stem, tokenize


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("running", "runn"),
        ("runn", "runn"),
        ("stories", "story"),
        ("abilities", "ability"),
        ("cats", "cat"),
        ("business", "busi"),
        ("happiness", "happi"),
        ("nation", "nation"),
        ("Mountains", "mountain"),
    ],
)
def test_stem_strips_first_matching_suffix(word: str, expected: str) -> None:
    assert stem(word) == expected


def test_stem_leaves_short_words_alone() -> None:
    assert stem("bed") == "bed"
    assert stem("as") == "as"
    assert stem("") == ""


def test_stem_strips_only_one_suffix() -> None:
    # A second pass would turn "station" into "sta".
    assert stem("stations") == "station"
    assert stem(stem("stations")) == "sta"


def test_stop_words_are_loaded() -> None:
    assert len(STOP_WORDS) == 138
    assert "the" in STOP_WORDS
    assert "mountain" not in STOP_WORDS


def test_tokenize_filters_short_numeric_and_stop_words() -> None:
    tokens = tokenize("The 3 cats, 2024 dogs & it's over!")
    assert tokens == ["cats", "dogs"]


def test_tokenize_splits_non_ascii_letters() -> None:
    assert tokenize("café naïve") == ["caf"]


def test_tokenize_preserves_duplicates_and_order() -> None:
    assert tokenize("python django python") == ["python", "django", "python"]


def test_tokenize_empty_text() -> None:
    assert tokenize("") == []
