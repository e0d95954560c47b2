from __future__ import annotations

import logging
from pathlib import Path


def main() -> None:
    """Entrypoint for running the game from the command line."""
    import sys

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) >= 2:
        cfg_path = Path(sys.argv[1])
    else:
        default = Path("config.json")
        cfg_path = default if default.exists() else None

    from game import Game  # local import keeps module load side effects minimal
    from map_io import MapSaturationError

    try:
        game = Game(cfg_path)
    except (ValueError, MapSaturationError) as e:
        # map and config errors end the session
        raise SystemExit(f"Failed to start: {e}")
    game.run()


if __name__ == "__main__":
    main()
