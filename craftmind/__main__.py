"""Module entry point for `python -m craftmind`."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

from rich.console import Console

from craftmind.app import install_signal_handlers, run_agent
from craftmind.config import resolve_settings
from craftmind.db.diary_log import DIARY_LOG_NAME
from craftmind.llm.base import LLMUnavailableError
from craftmind.logging_setup import configure_logging
from craftmind.render.diary_reader import read_cycle_records
from craftmind.render.live_tail import tail_diary_log
from craftmind.render.viewer import render_cycle
from craftmind.sim.actuator import ActuatorUnavailableError

logger = logging.getLogger("craftmind")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run a rule-bound Minecraft agent.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Agent JSON config with name, goal, rules and personality.",
    )
    parser.add_argument("--name", default=None, help="Agent name fallback.")
    parser.add_argument(
        "--llm",
        default=None,
        help="LLM backend to use: fake, ollama, or mlx.",
    )
    parser.add_argument("--model-id", default=None, help="Model ID for the backend.")
    parser.add_argument(
        "--ollama-host", default=None, help="Base URL of the Ollama server."
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds to wait between decision cycles.",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Number of decision cycles to run. Omit to run until stopped.",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Base directory for diary runs.",
    )
    parser.add_argument(
        "--show-cycles",
        action="store_true",
        help="Render every thought cycle to the console.",
    )
    parser.add_argument(
        "--view",
        action="store_true",
        help="Tail the latest (or --run-folder) diary in the live viewer.",
    )
    parser.add_argument(
        "--replay",
        action="store_true",
        help="Print every cycle of the latest (or --run-folder) diary.",
    )
    parser.add_argument(
        "--run-folder",
        type=Path,
        default=None,
        help="Run folder to view or replay (defaults to latest).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    args = parser.parse_args(argv)

    settings = resolve_settings(
        agent_config_path=args.config,
        agent_name=args.name,
        llm_backend=args.llm,
        model_id=args.model_id,
        ollama_host=args.ollama_host,
        decision_interval=args.interval,
        log_dir=args.log_dir,
        ticks=args.ticks,
    )
    console = Console()

    if args.view or args.replay:
        run_folder = args.run_folder or _latest_run_folder(settings.log_dir)
        if run_folder is None:
            raise SystemExit("No run folder found. Run the agent first.")
        if args.view:
            tail_diary_log(run_folder / DIARY_LOG_NAME)
        else:
            for record in read_cycle_records(run_folder / DIARY_LOG_NAME):
                console.print(render_cycle(record))
        return 0

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=settings.log_dir / "craftmind.log",
        console=console,
    )
    stop_event = threading.Event()
    install_signal_handlers(stop_event)

    def _print_cycle(record) -> None:
        console.print(render_cycle(record))

    try:
        run_dir = run_agent(
            settings,
            stop_event=stop_event,
            on_cycle=_print_cycle if args.show_cycles else None,
        )
    except (LLMUnavailableError, ActuatorUnavailableError) as exc:
        logger.error("Fatal startup error: %s", exc)
        return 1
    console.print(f"Diary saved to {run_dir}")
    return 0


def _latest_run_folder(base_dir: Path) -> Path | None:
    if not base_dir.exists():
        return None
    run_dirs = [
        path
        for path in base_dir.iterdir()
        if path.is_dir() and (path / DIARY_LOG_NAME).exists()
    ]
    if not run_dirs:
        return None
    return max(run_dirs, key=lambda path: path.stat().st_mtime)


if __name__ == "__main__":
    sys.exit(main())
