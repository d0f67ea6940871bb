"""Follow a diary log as it grows and show the latest cycle (Textual)."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from rich.panel import Panel
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Static

from craftmind.render.diary_reader import cycle_from_record, parse_record
from craftmind.render.viewer import render_cycle
from craftmind.sim.contracts import CycleRecord


class DiaryTailApp(App):
    CSS = """
    Screen {
        layout: vertical;
    }
    #cycle-view {
        height: 1fr;
    }
    """
    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, path: Path, *, poll_interval: float = 0.2) -> None:
        super().__init__()
        self._path = path
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self.title = f"craftmind diary: {path.parent.name}"

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(
                Panel(Text("Waiting for the next thought cycle..."), title="Diary"),
                id="cycle-view",
            )
        yield Footer()

    def on_mount(self) -> None:
        threading.Thread(target=self._tail_loop, daemon=True).start()

    def on_unmount(self) -> None:
        self._stop_event.set()

    def _tail_loop(self) -> None:
        while not self._path.exists():
            if self._stop_event.wait(self._poll_interval):
                return
        with self._path.open("r", encoding="utf-8") as handle:
            while not self._stop_event.is_set():
                line = handle.readline()
                if not line:
                    time.sleep(self._poll_interval)
                    continue
                cycle = cycle_from_record(parse_record(line))
                if cycle is not None:
                    self.call_from_thread(self._show_cycle, cycle)

    def _show_cycle(self, cycle: CycleRecord) -> None:
        self.query_one("#cycle-view", Static).update(render_cycle(cycle))


def tail_diary_log(path: Path, *, poll_interval: float = 0.2) -> None:
    DiaryTailApp(path, poll_interval=poll_interval).run()
