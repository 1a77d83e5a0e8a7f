import logging

import numpy as np

from grid_slot.utils.spin_handler import SymbolGenerator, calculate_win, generate_spin_grid

logger = logging.getLogger(__name__)


class SlotTester:
    """
    Plays ``num_spins`` headless spins at a fixed bet and collects
    statistics: RTP, hit frequency, scatter frequency, volatility, win
    distribution by bet multiplier and observed symbol frequencies.
    """

    def __init__(self, game_config, num_spins, bet_amount, seed=None):
        self.game_config = game_config
        self.num_spins = num_spins
        self.bet_amount = bet_amount
        self.seed = seed
        self.generator = None

        self.total_bet = 0
        self.total_win = 0
        self.hit_count = 0
        self.scatter_hits = 0
        self.wins_per_spin = []
        self.wins_by_multiplier = {}
        self.symbol_counts = dict.fromkeys(game_config.symbols, 0)

        self.overall_rtp = 0.0
        self.hit_frequency = 0.0
        self.scatter_frequency = 0.0
        self.volatility_index = 0.0

    def initialize_simulation_state(self):
        self.generator = SymbolGenerator(self.game_config, seed=self.seed)
        logger.info(f"Simulation seed {self.generator.seed}, {self.num_spins} spins at {self.bet_amount}")

    def run_simulation(self):
        if self.generator is None:
            self.initialize_simulation_state()
        for i in range(self.num_spins):
            spin_data = self._simulate_one_spin()
            self._collect_spin_statistics(spin_data)
            if (i + 1) % (self.num_spins // 20 or 1) == 0:
                logger.info(f"Completed {i + 1}/{self.num_spins} spins")
        self.calculate_derived_statistics()

    def _simulate_one_spin(self):
        grid = generate_spin_grid(self.game_config, self.generator)
        win_info = calculate_win(grid, self.bet_amount, self.game_config)
        return {
            "grid": grid,
            "bet": self.bet_amount,
            "win_amount": win_info['total_win'],
            "winning_lines": win_info['winning_lines'],
        }

    def _collect_spin_statistics(self, spin_data):
        win_amount = spin_data['win_amount']
        self.total_bet += spin_data['bet']
        self.total_win += win_amount
        self.wins_per_spin.append(win_amount)

        if win_amount > 0:
            self.hit_count += 1
        if any(line['type'] == 'scatter' for line in spin_data['winning_lines']):
            self.scatter_hits += 1

        multiplier_category = round(win_amount / spin_data['bet'])
        self.wins_by_multiplier[multiplier_category] = self.wins_by_multiplier.get(multiplier_category, 0) + 1

        symbols, counts = np.unique(np.array(spin_data['grid']), return_counts=True)
        for symbol, count in zip(symbols.tolist(), counts.tolist()):
            self.symbol_counts[symbol] += count

    def calculate_derived_statistics(self):
        if self.num_spins == 0:
            logger.warning("No spins were simulated, statistics are empty")
            return
        self.overall_rtp = (self.total_win / self.total_bet) * 100 if self.total_bet > 0 else 0.0
        self.hit_frequency = (self.hit_count / self.num_spins) * 100
        self.scatter_frequency = (self.scatter_hits / self.num_spins) * 100
        wins = np.asarray(self.wins_per_spin, dtype=float)
        self.volatility_index = float(np.std(wins) / self.bet_amount) if self.bet_amount > 0 else 0.0

    def symbol_frequencies(self):
        """``{symbol: (observed, configured)}`` probabilities over every drawn cell."""
        total_cells = sum(self.symbol_counts.values())
        frequencies = {}
        for symbol in self.game_config.symbols:
            observed = self.symbol_counts[symbol] / total_cells if total_cells else 0.0
            frequencies[symbol] = (observed, self.game_config.probability(symbol))
        return frequencies

    def summary_lines(self):
        lines = [
            "--- Simulation Summary ---",
            f"Slot Game: {self.game_config.name}",
            f"Total Spins Simulated: {self.num_spins}",
            f"Bet Amount Per Spin: {self.bet_amount}",
            f"Total Wagered: {self.total_bet}",
            f"Total Won: {self.total_win}",
            "",
            "--- Detailed Metrics ---",
            f"Observed RTP: {self.overall_rtp:.2f}%",
            f"Hit Frequency: {self.hit_frequency:.2f}% ({self.hit_count} wins out of {self.num_spins} spins)",
            f"Scatter Win Frequency: {self.scatter_frequency:.2f}% ({self.scatter_hits} spins)",
            f"Volatility Index (Win StdDev / Bet): {self.volatility_index:.2f}",
            "",
            "Win Distribution (by Bet Multiplier):",
        ]
        for mult, count in sorted(self.wins_by_multiplier.items()):
            lines.append(f"  {mult}x Bet: {count} times ({count / self.num_spins * 100:.2f}%)")
        lines.append("")
        lines.append("Symbol Frequencies (observed / configured):")
        for symbol, (observed, expected) in self.symbol_frequencies().items():
            lines.append(f"  {symbol}: {observed * 100:.2f}% / {expected * 100:.2f}%")
        return lines
