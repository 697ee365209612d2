from partycards.tsar import SETTING_LIMITS, GameSettings, SettingLimit


def test_defaults():
    settings = GameSettings()
    assert settings.player_cards == 10
    assert settings.win_points == 10
    assert settings.game_player_count == 10


def test_from_dict_ignores_unknown_keys():
    settings = GameSettings.from_dict({"win_points": 3, "timer": 30})
    assert settings.win_points == 3
    assert settings.player_cards == 10


def test_from_dict_none():
    assert GameSettings.from_dict(None).to_dict() == GameSettings().to_dict()


def test_to_dict():
    settings = GameSettings(player_cards=7, win_points=5, game_player_count=4)
    assert settings.to_dict() == {
        "player_cards": 7,
        "win_points": 5,
        "game_player_count": 4,
    }


def test_limits_are_metadata_only():
    settings = GameSettings(player_cards=999)
    limit = GameSettings.limits()["player_cards"]
    assert settings.player_cards == 999
    assert not limit.contains(settings.player_cards)


def test_limit_defaults_match_settings():
    settings = GameSettings()
    for name, limit in SETTING_LIMITS.items():
        assert isinstance(limit, SettingLimit)
        assert getattr(settings, name) == limit.default
        assert limit.contains(limit.default)


def test_repr():
    assert repr(GameSettings()) == (
        "GameSettings(player_cards=10, win_points=10, game_player_count=10)"
    )
