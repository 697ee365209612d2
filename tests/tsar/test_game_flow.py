"""
Whole game runs: rounds are dealt, answered and judged until somebody wins.
"""

from partycards.common.player import Player
from partycards.events import GameEventType
from partycards.tsar import Game, GameStage
from partycards.tsar.constants import ROUND_STAGES

# three players racing to two points need at most four rounds
MAX_ROUNDS = 10


def play_until_won(game, submit_all, check=None):
    for _ in range(MAX_ROUNDS):
        if game.state is GameStage.ENDGAME:
            return
        assert game.state is GameStage.PLAYING
        submit_all(game)
        assert game.state is GameStage.TSARTURN
        if check is not None:
            check(game)
        assert game.choose_turn_winner_by_index(game.tsar, 0)
    assert game.state is GameStage.ENDGAME


def test_first_round(waiting_game, submit_all):
    assert waiting_game.state is GameStage.WAITING
    assert len(waiting_game.players) == 3

    assert waiting_game.start()
    assert waiting_game.state is GameStage.PLAYING

    submit_all(waiting_game)
    assert waiting_game.state is GameStage.TSARTURN

    before = [player.points for player in waiting_game.players]
    assert waiting_game.choose_turn_winner_by_index(waiting_game.tsar, 0)
    after = [player.points for player in waiting_game.players]

    assert sum(after) - sum(before) == 1
    assert all(a >= b for a, b in zip(after, before))
    assert waiting_game.state is GameStage.PLAYING


def test_game_runs_to_a_winner(playing_game, submit_all):
    play_until_won(playing_game, submit_all)

    winners = playing_game.get_winners()
    assert len(winners) == 1
    assert winners[0].points == playing_game.settings.win_points
    assert sum(p.points for p in playing_game.players) == playing_game.rounds_played


def test_round_invariants_hold(playing_game, submit_all):
    scores = {}

    def check(game):
        assert game.state in ROUND_STAGES
        assert game.has_player(game.tsar)
        for player in game.players:
            assert all(player.hand.has_index(i) for i in player.played)
            assert player.points >= scores.get(player.id, 0)
            scores[player.id] = player.points

    play_until_won(playing_game, submit_all, check)


def test_notifications_of_a_whole_game(waiting_game, submit_all):
    log = []
    waiting_game.on(GameEventType.ROUND_DEALT, lambda data: log.append("dealt"))
    waiting_game.on(
        GameEventType.PLAYER_PLAYED_ALL, lambda data: log.append("played")
    )
    waiting_game.on(GameEventType.TSAR_CHOICE, lambda data: log.append("choice"))
    waiting_game.on(GameEventType.GAME_WINNER, lambda data: log.append("winner"))

    waiting_game.start()
    play_until_won(waiting_game, submit_all)

    rounds = waiting_game.rounds_played
    assert log.count("dealt") == rounds
    assert log.count("played") == 2 * rounds
    assert log.count("choice") == rounds
    assert log[-2:] == ["choice", "winner"]


def test_stage_history_of_a_round(playing_game, submit_all):
    entered = []
    playing_game.on(
        GameEventType.STATE_ENTERING, lambda data: entered.append(data["state"])
    )

    submit_all(playing_game)
    playing_game.choose_turn_winner_by_index(playing_game.tsar, 0)

    # dealing chains into PLAYING before its own entry is announced
    assert entered == [
        GameStage.INBETWEENTURN,
        GameStage.TSARTURN,
        GameStage.PLAYING,
        GameStage.DEALING,
    ]
    assert playing_game.machine.previous_state is GameStage.DEALING
    assert playing_game.state is GameStage.PLAYING


def test_new_round_after_a_player_leaves(playing_game, submit_all):
    leaving = next(p for p in playing_game.players if not playing_game.is_tsar(p))
    playing_game.remove_player(leaving)
    assert playing_game.state is GameStage.WAITING

    assert not playing_game.start()
    playing_game.add_player(Player("Player4"))
    assert playing_game.start()
    assert playing_game.state is GameStage.PLAYING

    play_until_won(playing_game, submit_all)


def test_table_empties_and_dies(playing_game):
    for _ in range(3):
        assert playing_game.remove_player_by_index(0)

    assert playing_game.state is GameStage.KILLED
    assert playing_game.players is None
    assert playing_game.cards is None
    assert not playing_game.add_player(Player("late"))


def test_independent_games_do_not_share_notifications(collection, settings):
    first = Game.create(Player("a"), cards=collection, settings=settings)
    second = Game.create(Player("b"), cards=collection, settings=settings)
    joined = []
    first.on(GameEventType.PLAYER_JOINED, lambda data: joined.append(data["game_id"]))

    second.add_player(Player("c"))
    first.add_player(Player("d"))

    assert joined == [first.id]


def test_subscribing_by_wire_name(playing_game, submit_all):
    chosen = []
    playing_game.on(GameEventType.TSAR_CHOICE.value, chosen.append)

    submit_all(playing_game)
    playing_game.choose_turn_winner_by_index(playing_game.tsar, 0)

    assert len(chosen) == 1
    assert chosen[0]["game_id"] == playing_game.id
