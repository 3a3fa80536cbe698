"""Line-oriented terminal front end over the battle service."""

from __future__ import annotations

import time
from collections.abc import Callable

from starfleet.game.app.scheduler import Scheduler
from starfleet.game.app.services.battle import BattleService
from starfleet.game.core.board import Side
from starfleet.game.core.models import Coord, Phase, Turn, parse_label

HELP_TEXT = (
    "Commands: fire <sector> (e.g. fire B7), new, resume, clear, reveal, log, stats, help, quit"
)


def render_side(side: Side, *, show_ships: bool) -> list[str]:
    """Render a side as text rows; hits win over ships, ships over misses."""
    header = "   " + " ".join(chr(ord("A") + c) for c in range(side.size))
    lines = [header]
    for r in range(side.size):
        cells: list[str] = []
        for c in range(side.size):
            coord = Coord(r, c)
            occupied = side.ship_id_at(coord) is not None
            if side.was_shot(coord):
                cells.append("X" if occupied else "o")
            elif show_ships and occupied:
                cells.append("#")
            else:
                cells.append(".")
        lines.append(f"{r + 1:>2} " + " ".join(cells))
    return lines


class Console:
    """Reads commands, drives the service and prints boards and status."""

    def __init__(
        self,
        service: BattleService,
        scheduler: Scheduler,
        *,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
        sleep: Callable[[float], None] = time.sleep,
        cpu_delay_seconds: float = 0.0,
    ) -> None:
        self._service = service
        self._scheduler = scheduler
        self._read = read
        self._write = write
        self._sleep = sleep
        self._cpu_delay_seconds = cpu_delay_seconds

    def run(self, *, resume: bool = True) -> None:
        """Loop over input lines until ``quit`` or end of input."""
        self._write(self._service.stats.record_line())
        if resume and not self._service.resume():
            self._service.status = "Press 'new' to begin a mission."
        self._await_opponent()
        self._show()
        self._write(HELP_TEXT)
        while True:
            try:
                line = self._read("> ")
            except EOFError:
                return
            if not self.handle(line):
                return

    def handle(self, line: str) -> bool:
        """Handle one command line; return False when the user quits."""
        parts = line.strip().split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]
        if command in {"quit", "exit", "q"}:
            return False
        if command == "help":
            self._write(HELP_TEXT)
        elif command == "new":
            self._service.new_mission()
            self._show()
        elif command == "resume":
            self._service.resume()
            self._await_opponent()
            self._show()
        elif command == "clear":
            self._service.clear_saved_mission()
            self._write(self._service.status)
        elif command == "reveal":
            self._service.toggle_reveal()
            self._show()
        elif command == "log":
            self._show_log()
        elif command == "stats":
            self._write(self._service.stats.record_line())
        elif command == "fire":
            self._fire(args)
        else:
            self._write(f"Unknown command '{command}'. {HELP_TEXT}")
        return True

    def _fire(self, args: list[str]) -> None:
        session = self._service.session
        if session is None or session.phase is not Phase.BATTLE or session.turn is not Turn.PLAYER:
            self._write("No active mission awaiting your orders.")
            return
        coord = parse_label(args[0]) if args else None
        if coord is None:
            self._write("Choose a sector like B7.")
            return
        result = self._service.fire(coord)
        if not result.accepted:
            self._write("Sector already targeted or invalid. Choose another enemy sector.")
            return
        self._write(self._service.status)
        self._await_opponent()
        self._show()
        if self._service.session is not None and self._service.session.phase is Phase.GAMEOVER:
            self._show_log(tail=5)
            self._write(self._service.stats.record_line())

    def _await_opponent(self) -> None:
        """Let a scheduled opponent move play out before taking more input."""
        if not self._service.cpu_move_pending:
            return
        self._sleep(self._cpu_delay_seconds)
        self._scheduler.drain()

    def _show(self) -> None:
        session = self._service.session
        if session is not None:
            self._write("Enemy fleet")
            for line in render_side(session.cpu, show_ships=session.reveal_cpu):
                self._write(line)
            self._write("Your fleet")
            for line in render_side(session.player, show_ships=True):
                self._write(line)
        self._write(self._service.status)

    def _show_log(self, tail: int | None = None) -> None:
        session = self._service.session
        if session is None or not session.log:
            self._write("No mission log yet.")
            return
        entries = session.log if tail is None else session.log[-tail:]
        for entry in entries:
            self._write(entry.text)
