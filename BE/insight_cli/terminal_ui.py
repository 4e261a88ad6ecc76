# BE/insight_cli/terminal_ui.py
"""
Terminal UI layer for the Alpha Insight CLI.

This module handles all user interaction and pretty printing: login prompt,
symbol prompt, the 11-option menu, and the renderers for the overview
(price analysis header, chart, historical comparison), basic analysis,
fundamentals tables and LLM narratives.

Colours are ANSI escapes and only emitted when stdout is a TTY.
"""

from __future__ import annotations

import getpass
import os
import sys
from typing import List, Optional, Sequence

import pandas as pd

from insight_core.auth import Credentials
from insight_core.charting import ChartGrid, colorize_rows
from insight_core.indicators import ComparisonRow, StatisticsSnapshot, TradingSignals
from insight_core.series import TimeSeries
from insight_core.utils.timezones import market_status


# ────────────────────────────────────────────────────────────────────────────
# Colours
# ────────────────────────────────────────────────────────────────────────────

def _use_color() -> bool:
    return sys.stdout.isatty() and not os.getenv("NO_COLOR")


_COLOR = _use_color()
RED = "\033[31m" if _COLOR else ""
GREEN = "\033[32m" if _COLOR else ""
YELLOW = "\033[33m" if _COLOR else ""
BLUE = "\033[34m" if _COLOR else ""
BOLD = "\033[1m" if _COLOR else ""
RESET = "\033[0m" if _COLOR else ""

RULE = "━" * 40


def clear_screen() -> None:
    if _COLOR:
        print("\033[2J\033[H", end="")


# ────────────────────────────────────────────────────────────────────────────
# Pretty output helpers
# ────────────────────────────────────────────────────────────────────────────

def print_line() -> None:
    print(RULE)


def print_table(headers: List[str], rows: List[List[object]]) -> None:
    # very small, dependency-free table
    widths = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(str(cell)))

    def fmt_row(r: List[object]) -> str:
        return "| " + " | ".join(str(c).ljust(widths[i]) for i, c in enumerate(r)) + " |"

    sep = "=" * len(fmt_row(headers))
    print(sep)
    print(fmt_row(headers))
    print(sep)
    for r in rows:
        print(fmt_row(r))
    print(sep)


# ────────────────────────────────────────────────────────────────────────────
# Prompts
# ────────────────────────────────────────────────────────────────────────────

def prompt_login() -> Credentials:
    print(f"\n{BOLD}Alpha Insight - Login{RESET}")
    print_line()
    username = ""
    while not username:
        username = input("Username: ").strip()
    password = getpass.getpass("Password: ")
    return Credentials(username=username, password=password)


def prompt_symbol(username: str) -> Optional[str]:
    """Upper-cased symbol, or None when the user quits."""
    print(f"\n{BOLD}Alpha Insight{RESET}")
    print_line()
    print(f"{BLUE}Logged in as:{RESET} {username}")
    while True:
        raw = input(f"{BOLD}Enter stock symbol (or 'q' to quit):{RESET} ").strip()
        if raw.lower() == "q":
            return None
        if raw:
            return raw.upper()


MENU_OPTIONS = (
    ("1", "Income Statement"),
    ("2", "Balance Sheet"),
    ("3", "Cash Flow Statement"),
    ("4", "Key Metrics"),
    ("5", "Ratios"),
    ("6", "Growth Metrics"),
    ("7", "Enterprise Values"),
    ("8", "Basic Analysis"),
    ("9", "GPT Analysis"),
    ("10", "Groq Analysis"),
    ("11", "Return to Stock Entry"),
)


def prompt_menu_choice() -> str:
    print()
    print_table(["Option", "Description"], [list(opt) for opt in MENU_OPTIONS])
    valid = {key for key, _ in MENU_OPTIONS}
    while True:
        ans = input("\nEnter your choice: ").strip()
        if ans in valid:
            return ans
        print(f"Please enter a number between 1 and {len(MENU_OPTIONS)}.")


# ────────────────────────────────────────────────────────────────────────────
# Overview
# ────────────────────────────────────────────────────────────────────────────

def print_price_analysis(series: TimeSeries, snapshot: StatisticsSnapshot) -> None:
    print(f"\n{BLUE}{BOLD}Stock Analysis for {series.symbol}{RESET}")
    print_line()

    tone = GREEN if snapshot.current >= snapshot.opening else RED
    print(f"Current Price: {tone}${snapshot.current:.2f}{RESET}")

    change = snapshot.price_change
    change_pct = snapshot.momentum
    if change >= 0:
        print(f"Price Change: {GREEN}+${change:.2f} (+{change_pct:.2f}%){RESET}")
    else:
        print(f"Price Change: {RED}-${-change:.2f} ({change_pct:.2f}%){RESET}")

    print(f"Day's Range: {RED}${snapshot.low:.2f}{RESET} - {GREEN}${snapshot.high:.2f}{RESET}")

    status = market_status()
    print(f"Market Status: {GREEN if status == 'Open' else RED}{status}{RESET}")
    print_line()


def print_chart(chart: ChartGrid, num_points: int) -> None:
    print(f"\n{BOLD}Price Chart - Last {num_points} Sessions{RESET}\n")
    if _COLOR:
        rows: Sequence[str] = colorize_rows(chart, GREEN, RED, RESET)
    else:
        rows = chart.plot_rows()
    for i, row in enumerate(rows):
        print(f"{chart.price_label_text(i)} {row}")
    print(chart.time_axis_text())
    print()


def print_comparison(rows: Sequence[ComparisonRow]) -> None:
    print(f"\n{BOLD}Historical Price Comparison{RESET}")
    print_line()
    print("Interval          | Percentage Change")
    print("------------------|-------------------")
    for row in rows:
        if row.percent_change is None:
            print(f"{row.label:<16}  | {YELLOW}{'N/A':>9}{RESET}")
        elif row.percent_change >= 0:
            print(f"{row.label:<16}  | {GREEN}+{row.percent_change:8.2f}%{RESET}")
        else:
            print(f"{row.label:<16}  | {RED}{row.percent_change:9.2f}%{RESET}")
    print_line()


# ────────────────────────────────────────────────────────────────────────────
# Menu actions
# ────────────────────────────────────────────────────────────────────────────

def print_basic_analysis(symbol: str, snapshot: StatisticsSnapshot, signals: TradingSignals) -> None:
    print(f"\n{BOLD}Basic Analysis for {symbol}{RESET}")
    print_line()

    print(f"\n{BLUE}Price Statistics:{RESET}")
    print(f"Current Price: ${snapshot.current:.2f}")
    print(f"Opening Price: ${snapshot.opening:.2f}")
    print(f"High: ${snapshot.high:.2f}")
    print(f"Low: ${snapshot.low:.2f}")
    print(f"Average Price: ${snapshot.mean:.2f}")
    print(f"Price Volatility: ${snapshot.volatility:.2f}")

    print(f"\n{BLUE}Technical Indicators:{RESET}")
    print(f"Momentum: {GREEN if snapshot.momentum >= 0 else RED}{snapshot.momentum:.2f}%{RESET}")
    print(f"Trend Strength: {GREEN if snapshot.trend_strength >= 0 else RED}{snapshot.trend_strength:.2f}%{RESET}")

    print(f"\n{BLUE}Price Movement Analysis:{RESET}")
    print(f"Upward Movements: {snapshot.up_movements}")
    print(f"Downward Movements: {snapshot.down_movements}")

    print(f"\n{BLUE}Trading Signals:{RESET}")
    if signals.position == "ABOVE":
        print(f"• Price is {GREEN}ABOVE{RESET} average by {signals.distance_pct:.2f}%")
    else:
        print(f"• Price is {RED}BELOW{RESET} average by {signals.distance_pct:.2f}%")

    if signals.momentum_signal == "UPWARD":
        print(f"• Strong {GREEN}UPWARD{RESET} momentum")
    elif signals.momentum_signal == "DOWNWARD":
        print(f"• Strong {RED}DOWNWARD{RESET} momentum")
    else:
        print(f"• {YELLOW}NEUTRAL{RESET} momentum")

    tier_color = {"HIGH": RED, "MODERATE": YELLOW}.get(signals.volatility_tier, GREEN)
    print(f"• {tier_color}{signals.volatility_tier}{RESET} volatility ({signals.volatility_pct:.2f}%)")

    print(f"\n{YELLOW}Note:{RESET} This is a basic technical analysis based on price action only.")
    print("For a more comprehensive analysis, use the GPT or Groq analysis options.")
    print_line()


def print_statement(title: str, table: pd.DataFrame) -> None:
    print(f"\n{title}:")
    if table.empty:
        print("No data available")
        return
    print_table(list(table.columns), table.astype(str).values.tolist())


def print_narrative(engine_name: str, text: Optional[str]) -> None:
    if not text:
        print(f"{RED}Failed to perform {engine_name} analysis{RESET}")
        return
    print(f"\n{BOLD}{engine_name} Analysis Results:{RESET}")
    print_line()
    print(text)
    print_line()


def pause() -> None:
    input("\nPress Enter to continue...")
