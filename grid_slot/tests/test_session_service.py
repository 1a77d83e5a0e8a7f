import pytest

from grid_slot.error_codes import ErrorCodes
from grid_slot.exceptions import InsufficientFundsException, ValidationException
from grid_slot.services.session_service import SlotSession
from grid_slot.utils.spin_handler import SymbolGenerator


def test_new_session_uses_game_defaults(game_config):
    session = SlotSession(game_config)
    assert session.balance == 1_000_000
    assert session.bet == 10_000
    assert session.use_color is True
    assert session.show_wins is True
    assert session.auto_spin is False
    assert session.grid is None


def test_spin_refused_when_balance_below_bet(game_config):
    session = SlotSession(game_config, balance=500, bet_index=0)
    session.auto_spin = True

    with pytest.raises(InsufficientFundsException) as exc_info:
        session.spin()

    assert exc_info.value.error_code == ErrorCodes.INSUFFICIENT_FUNDS
    assert exc_info.value.status_message == "Not enough balance. Add funds or lower bet."
    assert exc_info.value.details == {'balance': 500, 'bet': 1000}
    assert session.balance == 500
    assert session.auto_spin is False
    assert session.grid is None
    assert session.num_spins == 0


def test_spin_takes_bet_and_pays_win(game_config, filler_grid, fixed_generator):
    filler_grid[0][:4] = ['A', 'A', 'A', 'B']
    session = SlotSession(game_config, generator=fixed_generator(filler_grid))

    result = session.spin()

    assert result['bet'] == 10_000
    assert result['win_amount'] == 5_000
    assert result['win_descriptions'] == ["Row 0: A x3 => +5000"]
    assert result['balance'] == 995_000
    assert session.balance == 995_000
    assert session.grid == filler_grid
    assert result['grid'] is session.grid


def test_losing_spin_only_takes_bet(game_config, filler_grid, fixed_generator):
    session = SlotSession(game_config, generator=fixed_generator(filler_grid), balance=20_000)
    result = session.spin()
    assert result['win_amount'] == 0
    assert result['winning_lines'] == []
    assert session.balance == 10_000


def test_balance_equal_to_bet_may_spin(game_config, filler_grid, fixed_generator):
    session = SlotSession(game_config, generator=fixed_generator(filler_grid), balance=1000, bet_index=0)
    session.spin()
    assert session.balance == 0
    assert not session.can_afford_spin()


def test_session_aggregates(game_config, filler_grid, fixed_generator):
    winning = [row[:] for row in filler_grid]
    winning[0][:4] = ['A', 'A', 'A', 'B']
    session = SlotSession(game_config, generator=fixed_generator(winning, filler_grid))

    session.spin()
    session.spin()

    assert session.num_spins == 2
    assert session.amount_wagered == 20_000
    assert session.amount_won == 5_000
    assert session.balance == 1_000_000 - 20_000 + 5_000


def test_seeded_sessions_repeat(game_config):
    first = SlotSession(game_config, generator=SymbolGenerator(game_config, seed=7))
    second = SlotSession(game_config, generator=SymbolGenerator(game_config, seed=7))
    for _ in range(5):
        assert first.spin() == second.spin()
    assert first.balance == second.balance


def test_select_bet(game_config):
    session = SlotSession(game_config)
    assert session.select_bet(0) == 1000
    assert session.bet == 1000
    assert session.select_bet(8) == 500_000


@pytest.mark.parametrize('index', [-1, 9, 100])
def test_select_bet_out_of_range_keeps_current_bet(game_config, index):
    session = SlotSession(game_config)
    with pytest.raises(ValidationException) as exc_info:
        session.select_bet(index)
    assert exc_info.value.error_code == ErrorCodes.INVALID_BET
    assert session.bet == 10_000


def test_constructor_rejects_bad_bet_index(game_config):
    with pytest.raises(ValidationException) as exc_info:
        SlotSession(game_config, bet_index=len(game_config.bet_levels))
    assert exc_info.value.error_code == ErrorCodes.INVALID_BET


def test_add_funds_defaults_to_bonus(game_config):
    session = SlotSession(game_config, balance=0)
    assert session.add_funds() == 100_000
    assert session.add_funds(5) == 100_005


@pytest.mark.parametrize('amount', [0, -100, 2.5, "100"])
def test_add_funds_rejects_bad_amounts(game_config, amount):
    session = SlotSession(game_config, balance=10)
    with pytest.raises(ValidationException) as exc_info:
        session.add_funds(amount)
    assert exc_info.value.error_code == ErrorCodes.INVALID_AMOUNT
    assert session.balance == 10


def test_toggles_flip_and_return_new_value(game_config):
    session = SlotSession(game_config)
    assert session.toggle_color() is False
    assert session.toggle_color() is True
    assert session.toggle_show_wins() is False
    assert session.toggle_auto_spin() is True
    assert session.auto_spin is True
