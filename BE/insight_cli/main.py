# BE/insight_cli/main.py
"""
Alpha Insight terminal application

Workflow:
1. Log in (Auth0 password grant; password is not echoed)
2. Enter a stock symbol ('q' quits)
3. Overview: price analysis header, ASCII chart of the recent closes,
   historical comparison against 1 hour ... 3 months ago
4. Menu: fundamentals tables (1-7), basic analysis (8), GPT (9), Groq (10),
   back to symbol entry (11); the overview is redrawn after every action

An expired session sends the user back to the login prompt.
"""

from __future__ import annotations

from typing import Optional, Tuple

from dotenv import load_dotenv
from tqdm import tqdm

from insight_core.auth import Auth0Provider, AuthSession
from insight_core.config import load_settings, validate_api_keys
from insight_core.data_fetcher import default_source, diagnostics_for, fetch_statement
from insight_core.errors import AuthError, InsightError
from insight_core.indicators import STATEMENTS, statement_table
from insight_core.orchestrator import AnalysisOrchestrator, AnalysisReport
from insight_core.strategy import groq_summarizer, openai_summarizer
from insight_core.utils.logging import get_logger

from .terminal_ui import (
    RED, GREEN, RESET,
    clear_screen, pause,
    prompt_login, prompt_symbol, prompt_menu_choice,
    print_price_analysis, print_chart, print_comparison,
    print_basic_analysis, print_statement, print_narrative,
)

# Load environment variables from .env file
load_dotenv()

log = get_logger("insight_cli")
get_logger("insight_core")


# ────────────────────────────────────────────────────────────────────────────
# Login
# ────────────────────────────────────────────────────────────────────────────

def login_loop(auth: Auth0Provider) -> Tuple[AuthSession, str]:
    """Prompt until Auth0 accepts the credentials."""
    clear_screen()
    while True:
        creds = prompt_login()
        try:
            session = auth.login(creds)
        except AuthError as e:
            log.warning("%s", e)
            print(f"\n{RED}Login failed. Please check your credentials and try again.{RESET}")
            continue
        if auth.is_valid(session):
            print(f"\n{GREEN}Login successful! Welcome to Alpha Insight{RESET}")
            return session, creds.username
        session.clear()
        print(f"\n{RED}Login failed. Please check your credentials and try again.{RESET}")


# ────────────────────────────────────────────────────────────────────────────
# Overview + menu actions
# ────────────────────────────────────────────────────────────────────────────

def _comparison_progress(total: int):
    def wrap(rows):
        return tqdm(rows, total=total, desc="⏳ Historical prices", unit="window", leave=False)
    return wrap


def show_overview(report: AnalysisReport) -> None:
    print_price_analysis(report.series, report.snapshot)
    print_chart(report.chart, len(report.series))
    print_comparison(report.comparison)


def _stats_context(report: AnalysisReport) -> str:
    s, sig = report.snapshot, report.signals
    return (
        f"current={s.current:.2f} opening={s.opening:.2f} high={s.high:.2f} low={s.low:.2f} "
        f"mean={s.mean:.2f} momentum={s.momentum:.2f}% trend_strength={s.trend_strength:.2f}% "
        f"volatility={sig.volatility_pct:.2f}% ({sig.volatility_tier}) position={sig.position}"
    )


def run_menu_action(choice: str, report: AnalysisReport) -> None:
    symbol = report.series.symbol
    if choice in STATEMENTS:
        spec = STATEMENTS[choice]
        try:
            records = fetch_statement(symbol, spec.endpoint)
        except InsightError as e:
            log.warning("%s", e)
            print(f"{RED}Failed to fetch {spec.title.lower()} for {symbol}{RESET}")
            return
        print_statement(spec.title, statement_table(records, spec))
    elif choice == "8":
        print_basic_analysis(symbol, report.snapshot, report.signals)
    elif choice == "9":
        print("\nPerforming Advanced Analysis with GPT...")
        print_narrative("GPT", openai_summarizer().summarize(symbol, _stats_context(report)))
    elif choice == "10":
        print("\nPerforming Advanced Analysis with Groq AI...")
        print_narrative("Groq AI", groq_summarizer().summarize(symbol, _stats_context(report)))


def _print_diagnostics(source) -> None:
    diag = diagnostics_for(source)
    for failed in diag.get("failed", []):
        log.warning("Source failed: %s", failed)
    if diag.get("used"):
        log.info("Data source: %s", diag["used"])


# ────────────────────────────────────────────────────────────────────────────
# Symbol loop
# ────────────────────────────────────────────────────────────────────────────

def symbol_loop(orchestrator: AnalysisOrchestrator, auth: Auth0Provider, session: AuthSession, username: str) -> bool:
    """
    Returns True when the session expired (caller re-runs login),
    False when the user quit.
    """
    while True:
        if not auth.is_valid(session):
            print(f"\n{RED}Your session has expired. Please login again.{RESET}")
            session.clear()
            return True

        symbol = prompt_symbol(username)
        if symbol is None:
            print(f"\n{GREEN}Thank you for using Alpha Insight!{RESET}")
            return False

        try:
            report = orchestrator.run(symbol, progress=_comparison_progress(len(orchestrator.windows)))
        except InsightError as e:
            log.debug("fetch failed for %s: %s", symbol, e)
            print(f"{RED}Failed to fetch data for {symbol}{RESET}")
            continue
        _print_diagnostics(orchestrator.source)

        clear_screen()
        show_overview(report)

        while True:
            choice = prompt_menu_choice()
            if choice == "11":
                break
            if not auth.is_valid(session):
                print(f"\n{RED}Your session has expired. Please login again.{RESET}")
                session.clear()
                return True
            run_menu_action(choice, report)
            pause()
            clear_screen()
            show_overview(report)


# ────────────────────────────────────────────────────────────────────────────
# Main Entry Point
# ────────────────────────────────────────────────────────────────────────────

def main() -> None:
    """Login → symbol → overview/menu, until the user quits."""
    try:
        settings = load_settings()
        for service, present in validate_api_keys().items():
            if not present:
                log.warning("%s_API_KEY is not set; related features are disabled.", service)
        auth = Auth0Provider(settings.auth0)
        orchestrator = AnalysisOrchestrator(default_source(), settings=settings)

        session: Optional[AuthSession] = None
        expired = True
        while expired:
            session, username = login_loop(auth)
            expired = symbol_loop(orchestrator, auth, session, username)
        if session is not None:
            auth.logout(session)

    except KeyboardInterrupt:
        print("\n\n👋 Thanks for using Alpha Insight!")


# ────────────────────────────────────────────────────────────────────────────
# Entry Point
# ────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    main()
