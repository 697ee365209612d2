"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the card, state machine and
game tests.
"""

import pytest

from partycards.common.collection import CardCollection
from partycards.common.player import Player
from partycards.tsar import Game, GameSettings


DECK = {
    "name": "Testing-1",
    "black": [
        ["Santa, looking down at the ", 0, ', laughed in his jolly voice "', 1, '"!'],
        ["The drugee snatched the ", 0, ", grinning wildly."],
        ["I like ", 0, " with ", 1],
    ],
    "white": [
        "Christmas",
        "Flashlight",
        "Purse",
        "Oreo",
        "Communism For All",
        "cheese",
        "crackers",
        "A sad clown",
    ],
}


@pytest.fixture
def deck_data():
    """A fresh copy of the deck import data."""
    return {
        "name": DECK["name"],
        "black": [list(tokens) for tokens in DECK["black"]],
        "white": list(DECK["white"]),
    }


@pytest.fixture
def collection(deck_data):
    return CardCollection.create(deck_data)


@pytest.fixture
def settings():
    return GameSettings(player_cards=5, win_points=2, game_player_count=6)


@pytest.fixture
def players():
    return [Player("Player1"), Player("Player2"), Player("Player3")]


@pytest.fixture
def waiting_game(collection, settings, players):
    """A seeded game with three seated players, not started."""
    game = Game.create(players[0], cards=collection, settings=settings, rng=1234)
    for player in players[1:]:
        game.add_player(player)
    return game


@pytest.fixture
def playing_game(waiting_game):
    """A seeded game in the PLAYING stage."""
    assert waiting_game.start().ok
    return waiting_game


@pytest.fixture
def submit_all():
    """Return a helper that makes every non tsar player complete the round."""

    def _submit_all(game):
        fill_count = game.black_card.get_fill_count()
        for player in list(game.players):
            if game.is_tsar(player):
                continue
            for index in range(fill_count):
                outcome = game.play_by_card_index(player, index)
                assert outcome.ok, outcome.message

    return _submit_all
