import random
import secrets
import time
import logging
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, NamedTuple, Optional

from grid_slot.exceptions import GameLogicException

logger = logging.getLogger(__name__)


# --- Symbol generation ---

def make_seed():
    """Per-process seed: high resolution clock reading mixed with OS entropy."""
    return time.perf_counter_ns() ^ (time.time_ns() << 16) ^ secrets.randbits(64)


class SymbolGenerator:
    """
    Weighted random symbol source for one session.

    Passing ``seed`` makes the sequence of draws reproducible; leaving it
    out seeds from the clock and OS entropy so every run differs.
    """

    def __init__(self, game_config, seed=None):
        self.symbols = list(game_config.symbols)
        self.weights = list(game_config.weights)
        self.seed = make_seed() if seed is None else seed
        self._random = random.Random(self.seed)

    def draw_many(self, count):
        return self._random.choices(self.symbols, weights=self.weights, k=count)


def generate_spin_grid(game_config, generator):
    """
    Generates a fresh rows x columns grid, every cell an independent draw.

    Args:
        game_config (GameConfig): Supplies the grid dimensions.
        generator: Anything with ``draw_many(count)``, normally a SymbolGenerator.

    Returns:
        list[list[str]]: The new grid, row-major.
    """
    grid = [generator.draw_many(game_config.columns) for _ in range(game_config.rows)]
    logger.debug(f"Generated {game_config.rows}x{game_config.columns} grid")
    return grid


# --- Run detection ---

class RunScanState(Enum):
    NO_ANCHOR = 'no_anchor'
    ANCHOR_FIXED = 'anchor_fixed'
    TERMINATED = 'terminated'


class Run(NamedTuple):
    length: int
    symbol: Optional[str]


def find_initial_run(line, game_config):
    """
    Finds the run that starts at position 0 of ``line``.

    Wilds extend the run without choosing the symbol; the first standard
    symbol becomes the anchor and only the anchor (or a wild) extends it
    afterwards. A scatter ends the scan. A run made only of wilds pays as
    the highest paying standard symbol.

    Runs that do not touch position 0 are never reported, even when a
    longer one exists further along the line.

    Returns:
        Run: ``(length, symbol)``; symbol is None when length is 0.
    """
    wild = game_config.wild_symbol
    scatter = game_config.scatter_symbol
    state = RunScanState.NO_ANCHOR
    anchor = None
    length = 0

    for symbol in line:
        if symbol == scatter:
            state = RunScanState.TERMINATED
        elif symbol == wild:
            length += 1
        elif state is RunScanState.NO_ANCHOR:
            anchor = symbol
            length += 1
            state = RunScanState.ANCHOR_FIXED
        elif symbol == anchor:
            length += 1
        else:
            state = RunScanState.TERMINATED

        if state is RunScanState.TERMINATED:
            break

    if length > 0 and anchor is None:
        anchor = game_config.best_symbol
    return Run(length, anchor)


# --- Payouts ---

def _round_win(bet, multiplier):
    """bet x multiplier rounded half away from zero to a whole currency unit."""
    return int((Decimal(bet) * multiplier).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _line_multiplier(symbol, count, game_config):
    if count < game_config.min_run_length:
        return Decimal(0)
    base_pay = game_config.pay_table.get(symbol)
    if base_pay is None:
        return Decimal(0)
    return Decimal(str(base_pay)) * (count - game_config.min_run_length + 1)


def _scatter_multiplier(scatter_count, game_config):
    if scatter_count < game_config.scatter_min_count:
        return Decimal(0)
    return Decimal(str(game_config.scatter_step)) * (scatter_count - game_config.scatter_min_count + 1)


def get_symbol_payout(symbol, count, game_config):
    """
    Bet multiplier for ``count`` in a row of ``symbol``.

    3 of a kind pays the base pay, every extra symbol adds the base pay
    again. Shorter runs, wilds and scatters pay 0.
    """
    return float(_line_multiplier(symbol, count, game_config))


def get_line_payout(run, bet, game_config):
    return _round_win(bet, _line_multiplier(run.symbol, run.length, game_config))


def count_scatters(grid, game_config):
    return sum(row.count(game_config.scatter_symbol) for row in grid)


def get_scatter_payout(scatter_count, bet, game_config):
    """Scatter pays anywhere: step x (count - 4) times the bet for 5 or more."""
    return _round_win(bet, _scatter_multiplier(scatter_count, game_config))


# --- Helper Functions for calculate_win ---

def _validate_grid_shape(grid, game_config):
    if len(grid) != game_config.rows or any(len(row) != game_config.columns for row in grid):
        shape = [len(row) for row in grid]
        raise GameLogicException(
            f"Grid does not match the {game_config.rows}x{game_config.columns} layout",
            details={'row_lengths': shape}
        )


def iter_grid_lines(grid):
    """Yields ``(line_type, index, symbols)`` for every row then every column."""
    for r_idx, row in enumerate(grid):
        yield 'row', r_idx, list(row)
    num_cols = len(grid[0]) if grid else 0
    for c_idx in range(num_cols):
        yield 'col', c_idx, [row[c_idx] for row in grid]


def describe_win(winning_line):
    if winning_line['type'] == 'scatter':
        return f"Scatter {winning_line['symbol']} x{winning_line['count']} => +{winning_line['win_amount']}"
    label = 'Row' if winning_line['type'] == 'row' else 'Col'
    return (f"{label} {winning_line['line_id']}: {winning_line['symbol']} "
            f"x{winning_line['count']} => +{winning_line['win_amount']}")


def _calculate_line_wins_for_grid(grid, bet, game_config):
    line_win = 0
    winning_lines = []

    for line_type, index, line in iter_grid_lines(grid):
        run = find_initial_run(line, game_config)
        win_amount = get_line_payout(run, bet, game_config)
        if win_amount > 0:
            line_win += win_amount
            winning_lines.append({
                "line_id": index, "type": line_type, "symbol": run.symbol,
                "count": run.length, "win_amount": win_amount
            })

    return {"win_amount": line_win, "winning_lines": winning_lines}


def _calculate_scatter_wins_for_grid(grid, bet, game_config):
    scatter_count = count_scatters(grid, game_config)
    win_amount = get_scatter_payout(scatter_count, bet, game_config)
    if win_amount <= 0:
        return {"win_amount": 0, "winning_lines": []}
    return {
        "win_amount": win_amount,
        "winning_lines": [{
            "line_id": "scatter", "type": "scatter", "symbol": game_config.scatter_symbol,
            "count": scatter_count, "win_amount": win_amount
        }]
    }


def calculate_win(grid, bet, game_config):
    """
    Evaluates every row, every column and the scatter count of a grid.

    Args:
        grid (list[list[str]]): Fully populated grid.
        bet (int): Stake for this spin.
        game_config (GameConfig): Pay table and rules.

    Returns:
        dict: ``total_win`` (int), ``winning_lines`` (list of dicts in
        rows, columns, scatter order) and ``win_descriptions`` (one
        human-readable string per winning line, same order).

    Raises:
        GameLogicException: If the grid does not match the configured layout.
    """
    _validate_grid_shape(grid, game_config)
    line_results = _calculate_line_wins_for_grid(grid, bet, game_config)
    scatter_results = _calculate_scatter_wins_for_grid(grid, bet, game_config)

    winning_lines: List[dict] = line_results["winning_lines"] + scatter_results["winning_lines"]
    return {
        "total_win": line_results["win_amount"] + scatter_results["win_amount"],
        "winning_lines": winning_lines,
        "win_descriptions": [describe_win(line) for line in winning_lines],
    }
