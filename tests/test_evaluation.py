import numpy as np

from jump61.core import Board
from jump61.evaluation import RandomPolicy, SearchPolicy, evaluate_policies
from jump61.search import SearchConfig


def test_evaluate_random_vs_random_small():
    policy_red = RandomPolicy(np.random.default_rng(0))
    policy_blue = RandomPolicy(np.random.default_rng(1))
    result = evaluate_policies(
        policy_red, policy_blue, episodes=2, size=3, rng=np.random.default_rng(2)
    )
    assert result.games_played == 2
    assert result.red_wins + result.blue_wins + result.draws == 2
    assert result.average_length > 0


def test_search_policy_is_one_hot_on_legal_move():
    board = Board(3)
    mask = np.ones(9, dtype=np.int8)
    probs = SearchPolicy(SearchConfig(depth=1)).act(board.readonly_view(), mask)
    assert probs.sum() == 1.0
    assert mask[int(np.argmax(probs))] == 1


def test_search_vs_random_counts_episodes():
    episodes = []
    result = evaluate_policies(
        SearchPolicy(SearchConfig(depth=1)),
        RandomPolicy(),
        episodes=1,
        size=2,
        max_ply=50,
        rng=np.random.default_rng(0),
        on_episode=episodes.append,
    )
    assert episodes == [0]
    assert result.games_played == 1
    assert 0.0 <= result.winrate_red() <= 1.0


def test_random_policy_samples_with_its_generator():
    board = Board(3)
    mask = np.zeros(9, dtype=np.int8)
    mask[[2, 5, 7]] = 1
    first = RandomPolicy(np.random.default_rng(4)).act(board.readonly_view(), mask)
    second = RandomPolicy(np.random.default_rng(4)).act(board.readonly_view(), mask)

    assert np.array_equal(first, second)
    assert first.sum() == 1.0
    assert mask[int(np.argmax(first))] == 1
