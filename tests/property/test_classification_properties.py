from __future__ import annotations

from hypothesis import given, strategies as st

from catalog.content import file_extension, thumbnail_name
from catalog.extractor import parse_classifications, split_identifier

_words = st.text(
    alphabet=st.characters(blacklist_characters="[]:", blacklist_categories=("Cs", "Cc", "Zs", "Zl", "Zp")),
    min_size=1,
    max_size=12,
)


@given(st.lists(st.tuples(_words, _words), min_size=1, max_size=5))
def test_classifications_parse_every_pair(pairs: list[tuple[str, str]]) -> None:
    comment = "[" + ":::".join(f"{name}:{value}" for name, value in pairs) + "]"
    parsed = parse_classifications(comment)
    assert [(c.name, c.value) for c in parsed] == pairs


@given(st.text(alphabet=st.characters(blacklist_characters="[]")))
def test_comments_without_brackets_have_no_classifications(comment: str) -> None:
    assert parse_classifications(comment) == []


@given(_words, _words)
def test_identifier_round_trip(collection_id: str, item_id: str) -> None:
    collection_id = collection_id.replace("-", "")
    assert split_identifier(f"{collection_id}-{item_id}") == (collection_id, item_id)


@given(_words.filter(lambda s: "." not in s and "/" not in s), st.sampled_from(["jpg", "png", "JPEG"]))
def test_thumbnail_keeps_extension(stem: str, extension: str) -> None:
    name = thumbnail_name(f"{stem}.{extension}")
    assert name.startswith(stem)
    assert file_extension(name) == extension.lower()
