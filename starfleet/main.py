"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import random

from starfleet.game.app.console import Console
from starfleet.game.app.scheduler import Scheduler
from starfleet.game.app.services.battle import BattleService
from starfleet.game.infra.app_data import ensure_app_data_dirs
from starfleet.game.infra.config import load_default_env_files, load_settings
from starfleet.game.infra.logging import setup_logging, shutdown_logging
from starfleet.game.persistence.repository import MissionRepository
from starfleet.game.persistence.store import JsonFileStore, KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the Starfleet tactical simulator in the terminal."""
    parser = argparse.ArgumentParser(description="Starfleet tactical simulator.")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible missions.")
    parser.add_argument("--new", action="store_true", help="Start a new mission instead of resuming.")
    parser.add_argument("--memory", action="store_true", help="Keep state in memory only.")
    args = parser.parse_args(argv)

    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    settings = load_settings()
    logger.info("app_data_paths root=%s logs=%s saves=%s", paths["root"], paths["logs"], paths["saves"])

    seed = args.seed if args.seed is not None else settings.seed
    store: KeyValueStore = MemoryStore() if args.memory else JsonFileStore(paths["saves"])
    scheduler = Scheduler()
    service = BattleService(
        repository=MissionRepository(store),
        scheduler=scheduler,
        rng=random.Random(seed),
        settings=settings,
    )
    if args.new:
        service.new_mission()

    console = Console(service, scheduler, cpu_delay_seconds=settings.cpu_delay_seconds)
    try:
        console.run(resume=not args.new)
    except KeyboardInterrupt:
        logger.info("interrupted")
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
