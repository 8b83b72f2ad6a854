from __future__ import annotations

import threading
from typing import Callable, List, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from .lib.command import ChainResult

Action = Callable[[], ChainResult]

DOT_FRAMES = ("   ", ".  ", ".. ", "...")


class StatusReporter(Protocol):
    """How step progress is shown. Never changes what a step returns."""

    def starting(self, label: str) -> None:
        ...

    def track(self, action: Action) -> ChainResult:
        ...

    def succeeded(self, label: str) -> None:
        ...

    def failed(self, label: str, cause: str) -> None:
        ...


class ImmediateReporter:
    """Print the label, run the action, print [OK] or [FAIL]."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def starting(self, label: str) -> None:
        self.console.print(f"{escape(label)}... ", end="", highlight=False)

    def track(self, action: Action) -> ChainResult:
        return action()

    def succeeded(self, label: str) -> None:
        self.console.print("[bold green]\\[OK][/]")

    def failed(self, label: str, cause: str) -> None:
        self.console.print("[bold red]\\[FAIL][/]")
        if cause:
            self.console.print(f"  [red]{escape(cause)}[/]", highlight=False)


class AnimatedReporter(ImmediateReporter):
    """Show a dot animation while the action runs in a worker thread.

    The frames are redrawn every `interval` seconds until the worker is done;
    the worker is joined before any status is printed.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        *,
        interval: float = 0.5,
        frames: Sequence[str] = DOT_FRAMES,
    ):
        super().__init__(console)
        self.interval = interval
        self.frames = tuple(frames)
        self.frames_drawn = 0
        self._label = ""

    def starting(self, label: str) -> None:
        self._label = label

    def _write(self, text: str) -> None:
        # Raw write: rich strips carriage returns from printed text.
        self.console.file.write(text)
        self.console.file.flush()

    def _draw(self, frame: str) -> None:
        self._write(f"\r{self._label}... {frame}")
        self.frames_drawn += 1

    def track(self, action: Action) -> ChainResult:
        result: List[ChainResult] = []
        error: List[BaseException] = []

        def worker() -> None:
            try:
                result.append(action())
            except BaseException as e:  # re-raised in the calling thread
                error.append(e)

        t = threading.Thread(target=worker, name="step-worker", daemon=True)
        t.start()

        n = 0
        while t.is_alive():
            self._draw(self.frames[n % len(self.frames)])
            n += 1
            t.join(self.interval)

        t.join()
        # Clear the animation before the terminal status goes out.
        self._write(f"\r{self._label}... ")

        if error:
            raise error[0]
        return result[0]


def make_reporter(style: str, console: Optional[Console] = None) -> StatusReporter:
    if style == "animated":
        return AnimatedReporter(console)
    if style == "immediate":
        return ImmediateReporter(console)
    raise ValueError(f"Unknown progress style: {style}")
