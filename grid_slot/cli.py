#!/usr/bin/env python3
"""
Grid Slot CLI

Console slot machine on a weighted-random symbol grid, plus a headless
simulator for checking payout statistics.

Usage:
    grid-slot play
    grid-slot play --seed 42 --balance 50000 --no-color
    grid-slot paytable
    grid-slot simulate --spins 100000 --bet 10000
"""

import logging
import sys

import click

from grid_slot.config import Config, load_game_config
from grid_slot.config_validator import ConfigValidationError
from grid_slot.exceptions import ConfigurationException
from grid_slot.logging_config import configure_logging
from grid_slot.menu import SlotMenu
from grid_slot.services.session_service import SlotSession
from grid_slot.utils.display import render_paytable, render_session_summary
from grid_slot.utils.slot_tester import SlotTester
from grid_slot.utils.spin_handler import SymbolGenerator

logger = logging.getLogger(__name__)


def _load_game_or_exit(game_name):
    try:
        return load_game_config(game_name)
    except ConfigurationException as e:
        click.echo(f"❌ Error: {e.status_message}", err=True)
        for field, messages in e.details.items():
            click.echo(f"   {field}: {messages}", err=True)
        sys.exit(1)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Log spins and session events to stderr')
@click.option('--debug', is_flag=True, help='Log everything, including grid generation')
@click.option('--log-json', is_flag=True, help='Emit log records as JSON')
@click.pass_context
def cli(ctx, verbose, debug, log_json):
    """Grid Slot - a 10x10 console slot machine."""
    try:
        settings = Config()
    except ConfigValidationError as e:
        click.echo("❌ Invalid environment configuration:", err=True)
        for error in e.errors:
            click.echo(f"   {error}", err=True)
        sys.exit(1)

    if debug or settings.DEBUG:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    configure_logging(level=level, json_logs=log_json or settings.LOG_JSON)

    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


@cli.command()
@click.option('--game', help='Game directory name under slots/ (default from GRID_SLOT_GAME)')
@click.option('--seed', type=int, help='Fixed random seed for a reproducible session')
@click.option('--balance', type=click.IntRange(min=0), help='Starting balance (overrides the game default)')
@click.option('--no-color', is_flag=True, help='Start with colors turned off')
@click.option('--delay', type=click.FloatRange(min=0), help='Seconds between auto-spins')
@click.pass_context
def play(ctx, game, seed, balance, no_color, delay):
    """Play the interactive slot machine."""
    settings = ctx.obj['settings']
    game_config = _load_game_or_exit(game or settings.GAME)
    start_balance = balance if balance is not None else settings.START_BALANCE

    session = SlotSession(
        game_config,
        generator=SymbolGenerator(game_config, seed=seed),
        balance=start_balance
    )
    session.use_color = not no_color
    logger.info(f"Session started on '{game_config.short_name}' with balance {session.balance}, seed {session.generator.seed}")

    click.echo(f"Welcome! This is a simple {game_config.rows}x{game_config.columns} slot demo.")
    click.echo("Tip: If colors look weird, toggle Colors OFF in the menu.")
    SlotMenu(session, auto_spin_delay=delay if delay is not None else settings.AUTO_SPIN_DELAY).run()
    click.echo(render_session_summary(session))
    logger.info(f"Session ended after {session.num_spins} spins, wagered {session.amount_wagered}, won {session.amount_won}")
    click.echo("Goodbye!")


@cli.command()
@click.option('--game', help='Game directory name under slots/')
@click.pass_context
def paytable(ctx, game):
    """Print the pay table and exit."""
    game_config = _load_game_or_exit(game or ctx.obj['settings'].GAME)
    click.echo(render_paytable(game_config))


@cli.command()
@click.option('--game', help='Game directory name under slots/')
@click.option('--spins', type=click.IntRange(min=1), default=10000, show_default=True, help='Number of spins to simulate')
@click.option('--bet', type=click.IntRange(min=1), help='Bet per spin (default: the game default bet level)')
@click.option('--seed', type=int, help='Fixed random seed')
@click.pass_context
def simulate(ctx, game, spins, bet, seed):
    """Run headless spins and print payout statistics."""
    game_config = _load_game_or_exit(game or ctx.obj['settings'].GAME)
    bet_amount = bet if bet is not None else game_config.bet_levels[game_config.default_bet_index]

    click.echo(f"--- Simulating {spins} spins of {game_config.name} at {bet_amount} ---")
    tester = SlotTester(game_config, num_spins=spins, bet_amount=bet_amount, seed=seed)
    tester.run_simulation()
    for line in tester.summary_lines():
        click.echo(line)


if __name__ == '__main__':
    cli()
