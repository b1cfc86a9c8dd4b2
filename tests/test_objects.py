import dataclasses

import pytest

from brickgame.objects import GameInfo, UserAction


def test_user_action_order():
    names = [UserAction(value).name for value in range(8)]
    assert names == [
        "START",
        "PAUSE",
        "TERMINATE",
        "LEFT",
        "RIGHT",
        "UP",
        "DOWN",
        "ACTION",
    ]


def test_user_action_from_value():
    assert UserAction(0) is UserAction.START
    assert UserAction(7) is UserAction.ACTION


def test_user_action_rejects_unknown_value():
    with pytest.raises(ValueError):
        UserAction(8)


def test_game_info_holds_values():
    field = [[0] * 10 for _ in range(20)]
    info = GameInfo(field, None, 100, 300, 2, 2100, 0)
    assert info.field is field
    assert info.next is None
    assert info.score == 100
    assert info.high_score == 300
    assert info.level == 2
    assert info.speed == 2100
    assert info.pause == 0


def test_game_info_replace_round_trip():
    info = GameInfo(None, None, 0, 0, 1, 3000, 0)
    changed = dataclasses.replace(info, pause=1)
    assert changed.pause == 1
    assert dataclasses.replace(changed, pause=0) == info