import unittest

from grid_slot.config import load_game_config
from grid_slot.utils.slot_tester import SlotTester


class TestSlotTester(unittest.TestCase):

    def setUp(self):
        self.cfg = load_game_config()

    def test_totals_and_rates(self):
        tester = SlotTester(self.cfg, num_spins=500, bet_amount=1000, seed=11)
        tester.run_simulation()

        self.assertEqual(tester.total_bet, 500_000)
        self.assertEqual(len(tester.wins_per_spin), 500)
        self.assertEqual(sum(tester.wins_per_spin), tester.total_win)
        self.assertEqual(sum(tester.wins_by_multiplier.values()), 500)
        self.assertAlmostEqual(tester.overall_rtp, tester.total_win / 500_000 * 100)
        self.assertTrue(0 <= tester.hit_frequency <= 100)
        self.assertLessEqual(tester.scatter_hits, tester.hit_count)
        self.assertGreaterEqual(tester.volatility_index, 0.0)

    def test_every_cell_is_counted(self):
        tester = SlotTester(self.cfg, num_spins=50, bet_amount=1000, seed=4)
        tester.run_simulation()
        self.assertEqual(sum(tester.symbol_counts.values()), 50 * 100)

        frequencies = tester.symbol_frequencies()
        self.assertEqual(set(frequencies), set(self.cfg.symbols))
        self.assertAlmostEqual(sum(observed for observed, _ in frequencies.values()), 1.0)
        self.assertAlmostEqual(frequencies['A'][1], 18 / 89)

    def test_same_seed_same_report(self):
        first = SlotTester(self.cfg, num_spins=100, bet_amount=10000, seed=21)
        second = SlotTester(self.cfg, num_spins=100, bet_amount=10000, seed=21)
        first.run_simulation()
        second.run_simulation()
        self.assertEqual(first.summary_lines(), second.summary_lines())

    def test_summary_lines(self):
        tester = SlotTester(self.cfg, num_spins=20, bet_amount=2000, seed=1)
        tester.run_simulation()
        lines = tester.summary_lines()
        self.assertIn("Total Spins Simulated: 20", lines)
        self.assertIn("Total Wagered: 40000", lines)
        self.assertTrue(any(line.startswith("Observed RTP:") for line in lines))
        self.assertTrue(any(line.startswith("Volatility Index") for line in lines))
        self.assertIn("Symbol Frequencies (observed / configured):", lines)

    def test_zero_spins_leaves_statistics_empty(self):
        tester = SlotTester(self.cfg, num_spins=0, bet_amount=1000, seed=1)
        tester.run_simulation()
        self.assertEqual(tester.overall_rtp, 0.0)
        self.assertEqual(tester.symbol_frequencies()['A'][0], 0.0)


if __name__ == '__main__':
    unittest.main()
