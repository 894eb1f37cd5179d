import pytest

from scene_app.reference import ReferenceAddress, image_filename


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("John 3:16", "John 3:16"),
        ("  John 3:16  ", "John 3:16"),
        ("John3:16", "John 3:16"),
        ("1 Corinthians 13:4", "1 Corinthians 13:4"),
        ("Gênesis   1:1", "Gênesis 1:1"),
        ("Song of Solomon 2:1", "Song of Solomon 2:1"),
    ],
)
def test_parse_then_format_is_canonical(raw, expected):
    parsed = ReferenceAddress.parse(raw)
    assert parsed is not None
    assert parsed.format() == expected
    assert ReferenceAddress.parse(parsed.format()) == parsed


def test_parse_fields():
    ref = ReferenceAddress.parse("1 John 4:8")
    assert ref == ReferenceAddress(book="1 John", chapter=4, verse=8)


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "John", "John 3", "John 3:", "3:16", "John 3:16a", "John 0:1", "John 3:0", "John three:16"],
)
def test_parse_failures_return_none(raw):
    assert ReferenceAddress.parse(raw) is None


def test_next_increments_verse_only():
    ref = ReferenceAddress.parse("Psalms 23:1")
    two = ref.next().next()
    assert two.verse == 3
    assert two.chapter == 23
    assert two.book == "Psalms"
    assert ref.verse == 1


def test_str_matches_format():
    ref = ReferenceAddress("Mark", 1, 1)
    assert str(ref) == "Mark 1:1"


def test_image_filename():
    assert image_filename(ReferenceAddress.parse("John 3:16")) == "john_3_16.jpg"
    assert image_filename(ReferenceAddress.parse("1 Samuel 17:49")) == "1_samuel_17_49.jpg"
