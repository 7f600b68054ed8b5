import uuid

import pytest

from src.config import CategoryIcon
from src.qotd.domain.catalog import DEFAULT_CATEGORIES, QuestionCatalog


def test_default_catalog_order(catalog):
    names = [c.name for c in catalog]
    assert names == [
        "Partner Questions",
        "Friend Questions",
        "Date Questions",
        "Self-Reflection",
    ]


def test_every_category_has_questions(catalog):
    for category in catalog:
        assert len(category.questions) >= 1


def test_ids_are_unique(catalog):
    category_ids = [c.id for c in catalog]
    question_ids = [q.id for c in catalog for q in c.questions]
    assert len(set(category_ids)) == len(category_ids)
    assert len(set(question_ids)) == len(question_ids)


def test_ids_survive_a_rebuild():
    assert [c.id for c in QuestionCatalog()] == [c.id for c in QuestionCatalog()]


def test_choice_questions(self_reflection):
    feeling = self_reflection.questions[2]
    assert feeling.text == "How are you feeling today?"
    assert feeling.options == ("Energetic", "Content", "Tired", "Anxious", "Excited")
    assert self_reflection.questions[0].options is None


def test_icons_resolve_to_known_symbols(catalog):
    symbols = {icon.symbol for icon in CategoryIcon}
    for category in catalog:
        assert category.icon in symbols


def test_index_roundtrip(catalog):
    for idx, category in enumerate(catalog):
        assert catalog.index_of(category) == idx
        assert catalog.category_at(idx) is category


@pytest.mark.parametrize("index", [None, -1, 4, 99])
def test_category_at_out_of_range_is_none(catalog, index):
    assert catalog.category_at(index) is None


def test_get_by_id(catalog, self_reflection):
    assert catalog.get(self_reflection.id) is self_reflection
    assert catalog.get(uuid.uuid4()) is None
    assert catalog.get(None) is None


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        QuestionCatalog([DEFAULT_CATEGORIES[0], DEFAULT_CATEGORIES[0]])
