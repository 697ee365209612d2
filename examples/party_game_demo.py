#!/usr/bin/env python3
"""
Example playing a whole tsar judged game from the console.

Three players join a table, every round the non tsar players answer the black
card with the first cards in their hand and the tsar picks an answer at
random, until someone reaches the winning score.
"""

import logging
import sys

from partycards.common.collection import CardCollection
from partycards.common.player import Player
from partycards.common.util import make_rng, random_index
from partycards.events import EventPriority, GameEventType
from partycards.tsar import Game, GameSettings, GameStage

DECK = {
    "name": "Demo",
    "black": [
        ["Santa, looking down at the ", 0, ', laughed in his jolly voice "', 1, '"!'],
        ["The drugee snatched the ", 0, ", grinning wildly."],
        ["I like ", 0, " with ", 1],
        ["What's that smell? ", 0, "."],
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


def main(seed=None):
    rng = make_rng(seed)
    settings = GameSettings(player_cards=5, win_points=3, game_player_count=6)
    game = Game.create(
        Player("Alice"), cards=CardCollection.create(DECK), settings=settings, rng=rng
    )

    def on_round_dealt(data):
        print(f"\n--- {data['tsar_id']} is the Tsar ---")
        print(f"Black card: {data['black_card']}")

    def on_player_played(data):
        print(f"{data['player_id']} played {', '.join(data['cards'])}")

    def on_tsar_choice(data):
        print(f"Tsar picked {data['player_id']}: {data['text']}")

    def on_game_winner(data):
        print(f"\n{', '.join(data['winner_ids'])} won the game!")

    def on_any_event(event_data):
        event_type, data = event_data
        if event_type == GameEventType.STATE_ENTERING.name:
            logging.getLogger("partycards.demo").debug("Entered %s", data["state"].name)

    game.on(GameEventType.ROUND_DEALT, on_round_dealt)
    game.on(GameEventType.PLAYER_PLAYED_ALL, on_player_played)
    game.on(GameEventType.TSAR_CHOICE, on_tsar_choice)
    game.on(GameEventType.GAME_WINNER, on_game_winner)
    game.events.on_any(on_any_event, EventPriority.LOW)

    for name in ("Bob", "Charlie"):
        game.add_player(Player(name))

    outcome = game.start()
    if not outcome:
        print(f"Could not start: {outcome.message}")
        return 1

    while game.state is GameStage.PLAYING:
        fill_count = game.black_card.get_fill_count()
        for player in list(game.players):
            if game.is_tsar(player):
                continue
            for index in range(fill_count):
                game.play_by_card_index(player, index)

        choices = game.get_filled_in_card_text()
        game.choose_turn_winner_by_index(game.tsar, random_index(len(choices), rng))

    print("\nFinal scores:")
    for player in game.players:
        print(f"  {player.id}: {player.points}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    sys.exit(main(int(sys.argv[1]) if len(sys.argv) > 1 else None))
