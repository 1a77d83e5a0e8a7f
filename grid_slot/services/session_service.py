import logging

from grid_slot.error_codes import ErrorCodes
from grid_slot.exceptions import InsufficientFundsException, ValidationException
from grid_slot.utils.spin_handler import SymbolGenerator, calculate_win, generate_spin_grid

logger = logging.getLogger(__name__)


class SlotSession:
    """
    In-memory state of one player: balance, bet level, display toggles and
    the last grid. Each spin is evaluated independently of the previous one.
    """

    def __init__(self, game_config, generator=None, balance=None, bet_index=None):
        self.game_config = game_config
        self.generator = generator if generator is not None else SymbolGenerator(game_config)
        self.balance = game_config.start_balance if balance is None else balance
        self.bet_index = game_config.default_bet_index if bet_index is None else bet_index
        if not 0 <= self.bet_index < len(game_config.bet_levels):
            raise ValidationException(
                f"Bet index {self.bet_index} is out of range.", error_code=ErrorCodes.INVALID_BET
            )
        self.use_color = True
        self.show_wins = True
        self.auto_spin = False
        self.grid = None

        self.num_spins = 0
        self.amount_wagered = 0
        self.amount_won = 0

    @property
    def bet(self):
        return self.game_config.bet_levels[self.bet_index]

    def can_afford_spin(self):
        return self.balance >= self.bet

    def select_bet(self, index):
        """
        Switches to bet level ``index``.

        Raises:
            ValidationException: If ``index`` is not a valid position in the bet levels.
        """
        if not 0 <= index < len(self.game_config.bet_levels):
            raise ValidationException(
                f"Bet index {index} is out of range.",
                details={'index': index, 'levels': len(self.game_config.bet_levels)},
                error_code=ErrorCodes.INVALID_BET
            )
        self.bet_index = index
        logger.info(f"Bet changed to {self.bet} (index {index})")
        return self.bet

    def toggle_color(self):
        self.use_color = not self.use_color
        return self.use_color

    def toggle_show_wins(self):
        self.show_wins = not self.show_wins
        return self.show_wins

    def toggle_auto_spin(self):
        self.auto_spin = not self.auto_spin
        logger.info(f"Auto-spin {'enabled' if self.auto_spin else 'disabled'}")
        return self.auto_spin

    def add_funds(self, amount=None):
        amount = self.game_config.bonus_amount if amount is None else amount
        if not isinstance(amount, int) or amount <= 0:
            raise ValidationException(
                "Amount to add must be a positive integer.",
                details={'amount': amount},
                error_code=ErrorCodes.INVALID_AMOUNT
            )
        self.balance += amount
        logger.info(f"Added {amount} to balance, now {self.balance}")
        return self.balance

    def spin(self):
        """
        Takes the bet, spins a new grid, evaluates it and pays the win.

        Returns:
            dict: grid, bet, win amount, winning lines/descriptions and the new balance.

        Raises:
            InsufficientFundsException: If the balance does not cover the bet.
                Auto-spin is switched off and the balance is left untouched.
        """
        bet = self.bet
        self._validate_bet_and_balance(bet)
        self.balance -= bet

        self.grid = generate_spin_grid(self.game_config, self.generator)
        win_info = calculate_win(self.grid, bet, self.game_config)
        win_amount = win_info['total_win']
        self.balance += win_amount
        self._update_session_aggregates(bet, win_amount)

        logger.info(f"Spin {self.num_spins}: bet {bet}, win {win_amount}, balance {self.balance}")
        return {
            "grid": self.grid,
            "bet": bet,
            "win_amount": win_amount,
            "winning_lines": win_info['winning_lines'],
            "win_descriptions": win_info['win_descriptions'],
            "balance": self.balance,
        }

    def _validate_bet_and_balance(self, bet):
        if self.balance < bet:
            self.auto_spin = False
            logger.warning(f"Spin refused: balance {self.balance} is below bet {bet}")
            raise InsufficientFundsException(details={'balance': self.balance, 'bet': bet})

    def _update_session_aggregates(self, bet, win_amount):
        self.num_spins += 1
        self.amount_wagered += bet
        self.amount_won += win_amount
