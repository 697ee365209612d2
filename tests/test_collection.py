import pytest

from partycards.common.card import BlackCard, WhiteCard
from partycards.common.collection import CardCollection
from partycards.common.util import make_rng


def test_collection_initialization():
    col = CardCollection()
    assert col.white == []
    assert col.black == []
    assert col.sources == []
    assert col.name == "<Unnamed>"
    assert col.is_empty()


def test_collection_ignores_non_list_arguments():
    col = CardCollection(white="nope", black=None, name="x")
    assert col.white == []
    assert col.black == []


def test_create_from_deck_data(deck_data):
    col = CardCollection.create(deck_data)
    assert col.name == "Testing-1"
    assert len(col.white) == 8
    assert len(col.black) == 3
    assert col.size == 11
    assert all(isinstance(card, WhiteCard) for card in col.white)
    assert all(isinstance(card, BlackCard) for card in col.black)


def test_create_skips_missing_keys():
    col = CardCollection.create({"white": ["a"]})
    assert col.name == "<Unnamed>"
    assert len(col.white) == 1
    assert col.black == []


def test_to_dict_round_trips_import_format(deck_data):
    assert CardCollection.create(deck_data).to_dict() == deck_data


def test_random_white_card_is_a_clone(collection):
    card = collection.get_random_white_card(rng=make_rng(1))
    assert isinstance(card, WhiteCard)
    assert all(card is not template for template in collection.white)
    assert card.text in [template.text for template in collection.white]


def test_random_card_without_clone_returns_template(collection):
    card = collection.get_random_black_card(clone=False, rng=make_rng(1))
    assert any(card is template for template in collection.black)


def test_random_card_is_seeded(collection):
    a, b = make_rng(9), make_rng(9)
    first = [collection.get_random_white_card(rng=a).text for _ in range(10)]
    second = [collection.get_random_white_card(rng=b).text for _ in range(10)]
    assert first == second


def test_random_card_from_empty_pool():
    col = CardCollection()
    assert col.get_random_white_card() is None
    assert col.get_random_black_card() is None


def test_random_card_unknown_color(collection):
    with pytest.raises(ValueError):
        collection.get_random_card("green")


def test_clone_is_deep(collection):
    other = CardCollection(name="other")
    collection.merge(other)
    clone = collection.clone()
    assert clone.name == collection.name
    assert len(clone.white) == len(collection.white)
    assert all(a is not b for a, b in zip(clone.white, collection.white))
    assert clone.sources == [other]


def test_merge(collection):
    base = CardCollection(name="base")
    assert base.merge(collection)
    assert len(base.white) == len(collection.white)
    assert len(base.black) == len(collection.black)
    assert base.sources == [collection]


def test_merge_twice_is_a_no_op(collection):
    base = CardCollection(name="base")
    assert base.merge(collection)
    assert not base.merge(collection)
    assert len(base.white) == len(collection.white)


def test_merge_self_is_refused(collection):
    assert not collection.merge(collection)


def test_unmerge_removes_exactly_the_merged_cards(collection):
    own = WhiteCard("Christmas")
    base = CardCollection(white=[own], name="base")
    base.merge(collection)

    assert base.unmerge(collection)
    # same text as a merged card, but not from that collection
    assert base.white == [own]
    assert base.black == []
    assert base.sources == []


def test_unmerge_refuses_unknown_collection(collection):
    base = CardCollection(name="base")
    assert not base.unmerge(collection)


def test_unmerge_force(collection):
    shared = CardCollection(white=list(collection.white), name="shared")
    assert shared.unmerge(collection, force=True)
    assert shared.white == []


def test_merge_after_unmerge(collection):
    base = CardCollection(name="base")
    base.merge(collection)
    base.unmerge(collection)
    assert base.merge(collection)
    assert len(base.white) == len(collection.white)


def test_collection_str_and_repr(collection):
    assert str(collection) == "Collection 'Testing-1' of 8 white and 3 black cards"
    assert repr(collection) == "CardCollection(name='Testing-1', white=8, black=3)"
