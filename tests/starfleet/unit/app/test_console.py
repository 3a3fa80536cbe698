import random

from starfleet.game.app.console import Console, render_side
from starfleet.game.app.scheduler import Scheduler
from starfleet.game.app.services.battle import BattleService
from starfleet.game.core.models import Coord, Turn

from tests.starfleet.helpers import make_known_side


def _console(service, scheduler, lines: list[str] | None = None):
    out: list[str] = []
    pending = iter(lines or [])

    def _read(_prompt: str) -> str:
        try:
            return next(pending)
        except StopIteration:
            raise EOFError from None

    console = Console(
        service,
        scheduler,
        read=_read,
        write=out.append,
        sleep=lambda _seconds: None,
        cpu_delay_seconds=0.45,
    )
    return console, out


def test_render_side_marks_hits_misses_and_ships() -> None:
    side = make_known_side()
    side.shots.update({Coord(0, 0), Coord(9, 9)})
    visible = render_side(side, show_ships=True)
    hidden = render_side(side, show_ships=False)
    assert visible[0] == "   A B C D E F G H I J"
    assert visible[1] == " 1 X # . . . . . . . ."
    assert hidden[1] == " 1 X . . . . . . . . ."
    assert visible[10] == "10 . . . . . . . . . o"


def test_fire_command_runs_opponent_reply(service_factory, scheduler) -> None:
    service = service_factory()
    console, out = _console(service, scheduler)
    assert console.handle("new")
    assert "Enemy fleet" in out
    assert console.handle("fire B7")
    session = service.session
    assert Coord(6, 1) in session.cpu.shots
    assert session.turn is Turn.PLAYER
    assert len(session.player.shots) == 1

    out.clear()
    console.handle("fire b7")
    assert out == ["Sector already targeted or invalid. Choose another enemy sector."]


def test_bad_input_and_quit(service_factory, scheduler) -> None:
    console, out = _console(service_factory(), scheduler)
    console.handle("fire B7")
    assert out[-1] == "No active mission awaiting your orders."
    console.handle("new")
    console.handle("fire Z99")
    assert out[-1] == "Choose a sector like B7."
    console.handle("warp 9")
    assert out[-1].startswith("Unknown command 'warp'.")
    assert console.handle("   ")
    assert not console.handle("quit")


def test_run_resumes_and_stops_at_end_of_input(service_factory, scheduler) -> None:
    saved = service_factory()
    saved.new_mission()
    service = service_factory()
    console, out = _console(service, scheduler, ["stats", "log"])
    console.run()
    assert out[0] == "Career record - Federation wins: 0 | Enemy wins: 0"
    assert "Mission resumed from saved state." in out
    assert out[-1].startswith("Stardate 2402.5")


def test_run_plays_pending_opponent_move_from_resumed_save(
    service_factory, scheduler, repository
) -> None:
    interrupted = BattleService(
        repository=repository, scheduler=Scheduler(), rng=random.Random(1)
    )
    interrupted.new_mission()
    interrupted.fire(Coord(5, 5))
    saved = repository.load_session()
    assert saved is not None and saved.turn is Turn.CPU

    service = service_factory(seed=2)
    console, out = _console(service, scheduler, ["fire A1"])
    console.run()

    session = service.session
    assert session is not None
    assert len(session.player.shots) == 2
    assert Coord(0, 0) in session.cpu.shots
    assert session.turn is Turn.PLAYER
    assert "No active mission awaiting your orders." not in out


def test_resume_command_plays_pending_opponent_move(
    service_factory, scheduler, repository
) -> None:
    interrupted = BattleService(
        repository=repository, scheduler=Scheduler(), rng=random.Random(1)
    )
    interrupted.new_mission()
    interrupted.fire(Coord(5, 5))

    service = service_factory(seed=2)
    console, _ = _console(service, scheduler)
    assert console.handle("resume")
    assert service.session is not None
    assert service.session.turn is Turn.PLAYER
    assert not service.cpu_move_pending
