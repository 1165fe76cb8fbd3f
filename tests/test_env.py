"""
Tests for the Gymnasium environment wrapper.
"""
import numpy as np
import pytest

from connectfour.game.rules import ConnectFourEnv


@pytest.fixture
def env():
    env = ConnectFourEnv()
    yield env
    env.close()


def test_spaces(env):
    assert env.action_space.n == 7
    assert env.observation_space.shape == (6, 7)


def test_custom_size_spaces():
    env = ConnectFourEnv(height=5, width=9)
    observation, _ = env.reset()

    assert env.action_space.n == 9
    assert observation.shape == (5, 9)


def test_reset(env):
    """Test that reset returns an empty board and full info."""
    observation, info = env.reset(seed=0)

    assert observation.dtype == np.int8
    assert np.all(observation == 0)
    assert env.observation_space.contains(observation)
    assert info['valid_moves'] == list(range(7))
    assert info['current_player'] == 1
    assert info['game_result'] == 'IN_PROGRESS'
    assert info['last_move'] is None


def test_reset_with_starting_player(env):
    _, info = env.reset(options={'first': 2})
    assert info['current_player'] == 2


def test_step_valid_move(env):
    env.reset()
    observation, reward, terminated, truncated, info = env.step(3)

    assert observation[5, 3] == 1
    assert reward == env.reward_step
    assert not terminated
    assert not truncated
    assert info['current_player'] == 2
    assert info['last_move'] == (5, 3)


def test_step_invalid_move(env):
    """Test that rejected moves truncate without changing the board."""
    env.reset()
    observation, reward, terminated, truncated, info = env.step(7)

    assert reward == env.reward_invalid_move
    assert not terminated
    assert truncated
    assert info['invalid_move'] is True
    assert np.all(observation == 0)


def test_step_full_column(env):
    env.reset()
    for _ in range(6):
        env.step(0)

    _, reward, _, truncated, info = env.step(0)
    assert reward == env.reward_invalid_move
    assert truncated
    assert 0 not in info['valid_moves']


def test_player_one_win(env):
    env.reset()
    for action in [0, 1, 0, 1, 0, 1]:
        env.step(action)

    _, reward, terminated, truncated, info = env.step(0)

    assert reward == env.reward_win
    assert terminated
    assert not truncated
    assert info['winner'] == 1
    assert info['game_result'] == 'WON'
    assert sorted(info['winning_line']) == [(2, 0), (3, 0), (4, 0), (5, 0)]
    assert info['valid_moves'] == []


def test_player_two_win(env):
    env.reset()
    for action in [6, 0, 1, 0, 1, 0, 1]:
        env.step(action)

    _, reward, terminated, _, info = env.step(0)

    assert reward == env.reward_lose
    assert terminated
    assert info['winner'] == 2


def test_step_after_game_over_is_invalid(env):
    env.reset()
    for action in [0, 1, 0, 1, 0, 1, 0]:
        env.step(action)

    _, reward, terminated, truncated, info = env.step(3)
    assert reward == env.reward_invalid_move
    assert truncated
    assert info['invalid_move'] is True


def test_draw():
    env = ConnectFourEnv(height=3, width=3)
    env.reset()
    for action in [0, 1, 2, 0, 1, 2, 0, 1]:
        env.step(action)

    _, reward, terminated, _, info = env.step(2)
    assert reward == env.reward_draw
    assert terminated
    assert info['game_result'] == 'TIED'


def test_render_modes():
    env = ConnectFourEnv(render_mode='ascii')
    env.reset()
    env.step(0)

    text = env.render()
    assert isinstance(text, str)
    assert "X" in text

    assert ConnectFourEnv().render() is None

    with pytest.raises(ValueError):
        ConnectFourEnv(render_mode='rgb_array')


def test_human_render_prints(capsys):
    env = ConnectFourEnv(render_mode='human')
    env.reset()
    env.step(2)

    out = capsys.readouterr().out
    assert "|0 1 2 3 4 5 6|" in out
