import click

from grid_slot.utils.spin_handler import get_symbol_payout


def on_off(flag):
    return "ON" if flag else "OFF"


def render_symbol(symbol, game_config, use_color=True):
    cell = f" {symbol} "
    color = game_config.colors.get(symbol)
    if use_color and color:
        return click.style(cell, fg=color)
    return cell


def render_grid(grid, game_config, use_color=True):
    """Grid with column indices on top and row indices on the left."""
    lines = ["", "   " + "".join(f"{c:>2} " for c in range(len(grid[0]) if grid else 0))]
    for r_idx, row in enumerate(grid):
        cells = "".join(render_symbol(symbol, game_config, use_color) for symbol in row)
        lines.append(f"{r_idx:>2} {cells}")
    lines.append("")
    return "\n".join(lines)


def render_paytable(game_config):
    run = game_config.min_run_length
    lines = [f"=== Paytable ({run}+ in a row/column from start) ==="]
    for symbol in sorted(game_config.standard_symbols, key=game_config.pay_table.get):
        first = get_symbol_payout(symbol, run, game_config)
        extra = get_symbol_payout(symbol, run + 1, game_config) - first
        lines.append(f"  {symbol}: x{first:.2f} for {run}; +x{extra:.2f} each extra symbol")
    wild, scatter = game_config.wild_symbol, game_config.scatter_symbol
    step = f"{game_config.scatter_step:g}"
    lines.append(f"  {wild}: Wild (substitutes any symbol except {scatter})")
    lines.append(f"  {scatter}: Scatter pays anywhere: x{step} per symbol above "
                 f"{game_config.scatter_min_count - 1} (e.g. {game_config.scatter_min_count}{scatter} => x{step})")
    return "\n".join(lines)


def render_status(session):
    return (f"Balance: {session.balance}"
            f" | Bet: {session.bet}"
            f" | Colors: {on_off(session.use_color)}"
            f" | Show wins: {on_off(session.show_wins)}"
            f" | Auto-spin: {on_off(session.auto_spin)}")


def render_win_breakdown(spin_result):
    if not spin_result['win_descriptions']:
        return "No line wins."
    return "\n".join(spin_result['win_descriptions'])


def render_result_line(spin_result):
    return f"Result: -{spin_result['bet']} +{spin_result['win_amount']} => Balance = {spin_result['balance']}"


def render_session_summary(session):
    return (f"Spins: {session.num_spins}"
            f" | Wagered: {session.amount_wagered}"
            f" | Won: {session.amount_won}"
            f" | Final balance: {session.balance}")
