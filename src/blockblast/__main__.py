"""Command line entry point for the Block Blast engine.

Run with: `python -m blockblast`

By default a single frame of a freshly dealt game is printed as ASCII along
with the tray, a minimal smoke test that the engine deals and renders.
``--play`` opens the pygame front-end and ``--simulate N`` plays N games with a
random agent on the placement environment, logging each final score.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List

from .game_state import GameState
from .placement_env import PlacementEnv
from .utils import render_ascii


LOGGER = logging.getLogger(__name__)


def _print_frame(state: GameState) -> None:
    print(render_ascii(state.board))
    tray = ", ".join(piece.key.value if piece else "-" for piece in state.tray)
    print(f"Tray: {tray}")
    print(f"Score: {state.score}")


def simulate(games: int, seed: int | None = None) -> List[int]:
    """Play ``games`` sessions choosing uniformly among legal placements."""

    rng = random.Random(seed)
    env = PlacementEnv()
    scores: List[int] = []
    for index in range(1, games + 1):
        obs, info = env.reset(seed=rng.randrange(2**32))
        done = env.state.game_over
        while not done:
            actions = info["action_list"]
            if not actions:
                break
            obs, _, done, info = env.step(rng.choice(actions).action)
        scores.append(int(obs["score"]))
        LOGGER.info(
            "Game %d: score=%d moves=%d lines=%d",
            index,
            obs["score"],
            env.state.moves,
            env.state.lines_cleared,
        )
    return scores


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockblast", description=__doc__)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--play", action="store_true", help="Open the pygame front-end.")
    mode.add_argument(
        "--simulate",
        type=int,
        metavar="N",
        default=0,
        help="Play N games with a random agent and log the scores.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for dealing pieces.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    args = parser.parse_args(argv)
    if args.simulate < 0:
        parser.error("--simulate must be non-negative")
    return args


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    if args.play:
        from .run_pygame import main as play

        play(seed=args.seed)
        return

    if args.simulate:
        scores = simulate(args.simulate, seed=args.seed)
        LOGGER.info("Average score over %d game(s): %.1f", len(scores), sum(scores) / len(scores))
        return

    state = GameState(rng=random.Random(args.seed))
    state.start_session()
    _print_frame(state)


if __name__ == "__main__":
    main()
