import logging
import sys
import time

import click

from grid_slot.exceptions import InsufficientFundsException, ValidationException
from grid_slot.utils.display import (
    on_off, render_grid, render_paytable, render_result_line, render_status, render_win_breakdown
)

logger = logging.getLogger(__name__)

QUIT, SPIN, CHANGE_BET, TOGGLE_COLORS, TOGGLE_SHOW_WINS, PAYTABLE, TOGGLE_AUTO_SPIN, ADD_FUNDS = range(8)


class SlotMenu:
    """
    Numeric console menu driving a SlotSession.

    Reads one choice per line from ``input_stream``; end of input is
    treated as quit. While auto-spin is on no prompt is shown and every
    iteration spins until the balance no longer covers the bet.
    """

    def __init__(self, session, auto_spin_delay=0.25, input_stream=None, sleep=time.sleep):
        self.session = session
        self.auto_spin_delay = auto_spin_delay
        self.input_stream = input_stream
        self.sleep = sleep
        self._handlers = {
            SPIN: self.do_spin,
            CHANGE_BET: self.do_change_bet,
            TOGGLE_COLORS: self.do_toggle_colors,
            TOGGLE_SHOW_WINS: self.do_toggle_show_wins,
            PAYTABLE: self.do_paytable,
            TOGGLE_AUTO_SPIN: self.do_toggle_auto_spin,
            ADD_FUNDS: self.do_add_funds,
        }

    def _stream(self):
        if self.input_stream is None:
            self.input_stream = sys.stdin
        return self.input_stream

    def _read_token(self):
        """Next non-blank input line, or None at end of input."""
        while True:
            line = self._stream().readline()
            if not line:
                return None
            if line.strip():
                return line.strip()

    def print_menu(self):
        game_config = self.session.game_config
        click.echo(f"\n==== {game_config.name} ====")
        click.echo("\n" + render_status(self.session))
        click.echo("1) Spin\n2) Change bet\n3) Toggle colors\n4) Toggle show-wins\n5) Paytable\n"
                   f"6) Toggle auto-spin\n7) Add funds (+{game_config.bonus_amount:,})\n0) Quit")
        click.echo("> ", nl=False)

    def run(self):
        while True:
            if self.session.auto_spin:
                choice = SPIN
            else:
                self.print_menu()
                token = self._read_token()
                if token is None:
                    logger.info("End of input, leaving menu")
                    return
                try:
                    choice = int(token)
                except ValueError:
                    choice = None

            if choice == QUIT:
                return
            handler = self._handlers.get(choice)
            if handler is None:
                click.echo("Invalid choice.")
                continue
            if handler() is False:
                return

    def do_spin(self):
        session = self.session
        try:
            result = session.spin()
        except InsufficientFundsException as e:
            click.echo(e.status_message)
            return

        click.echo(render_grid(result['grid'], session.game_config, session.use_color))
        if session.show_wins:
            click.echo(render_win_breakdown(result))
        click.echo(render_result_line(result))

        if session.auto_spin:
            self.sleep(self.auto_spin_delay)
            if not session.can_afford_spin():
                click.echo("Auto-spin stopped (insufficient balance).")
                session.auto_spin = False

    def do_change_bet(self):
        click.echo("Select bet index:")
        for i, level in enumerate(self.session.game_config.bet_levels):
            marker = "  <- current" if i == self.session.bet_index else ""
            click.echo(f"  [{i}] {level}{marker}")
        click.echo("> ", nl=False)
        token = self._read_token()
        if token is None:
            return False
        try:
            self.session.select_bet(int(token))
        except (ValueError, ValidationException):
            logger.debug(f"Ignoring bet selection '{token}'")

    def do_toggle_colors(self):
        click.echo(f"Colors: {on_off(self.session.toggle_color())}")

    def do_toggle_show_wins(self):
        click.echo(f"Show wins: {on_off(self.session.toggle_show_wins())}")

    def do_paytable(self):
        click.echo("\n" + render_paytable(self.session.game_config))

    def do_toggle_auto_spin(self):
        click.echo(f"Auto-spin: {on_off(self.session.toggle_auto_spin())}")

    def do_add_funds(self):
        amount = self.session.game_config.bonus_amount
        balance = self.session.add_funds(amount)
        click.echo(f"+{amount:,} added. Balance = {balance}")
