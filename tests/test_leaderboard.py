"""Leaderboard ordering and projection."""

from snakequiz.services.leaderboard import build_leaderboard, find_rank


def _player(pid, name, score, finish_time=None, org="Acme"):
    return {
        "id": pid,
        "event_id": 1,
        "org": org,
        "name": name,
        "designation": "Engineer",
        "score": score,
        "finished": finish_time is not None,
        "finishTime": finish_time,
        "answers": [],
    }


def test_sorted_by_score_descending():
    board = build_leaderboard([
        _player(1, "low", -4),
        _player(2, "high", 20),
        _player(3, "mid", 8),
    ])
    assert [row["name"] for row in board] == ["high", "mid", "low"]
    assert [row["rank"] for row in board] == [1, 2, 3]


def test_equal_score_earlier_finish_ranks_higher():
    board = build_leaderboard([
        _player(1, "slow", 10, finish_time=5_000),
        _player(2, "fast", 10, finish_time=1_000),
    ])
    assert [row["name"] for row in board] == ["fast", "slow"]


def test_finished_vs_unfinished_tie_keeps_registration_order():
    board = build_leaderboard([
        _player(1, "still-playing", 10),
        _player(2, "done", 10, finish_time=1_000),
    ])
    assert [row["name"] for row in board] == ["still-playing", "done"]


def test_rows_are_projected():
    board = build_leaderboard([_player(7, "solo", 3, finish_time=42)])
    assert board == [{
        "rank": 1,
        "name": "solo",
        "org": "Acme",
        "designation": "Engineer",
        "score": 3,
        "finished": True,
    }]


def test_empty_session_gives_empty_board():
    assert build_leaderboard([]) == []


def test_find_rank_matches_name_and_org():
    board = build_leaderboard([
        _player(1, "sam", 5, org="Blue"),
        _player(2, "sam", 9, org="Red"),
    ])
    assert find_rank(board, "sam", "Red") == 1
    assert find_rank(board, "sam", "Blue") == 2
    assert find_rank(board, "sam", "Green") is None
