"""CLI command to run computer-vs-computer games and report statistics."""

from __future__ import annotations

import argparse
import json
import logging

from sim.self_play import POLICY_KINDS, SelfPlayConfig, SelfPlayRunner


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run computer-vs-computer chess games.")
    parser.add_argument("--games", type=int, default=50, help="Number of games")
    parser.add_argument("--white", type=str, default="medium", choices=POLICY_KINDS, help="White policy: a difficulty or random")
    parser.add_argument("--black", type=str, default="medium", choices=POLICY_KINDS, help="Black policy: a difficulty or random")
    parser.add_argument("--max-plies", type=int, default=300, help="Ply limit per game")
    parser.add_argument("--seed", type=int, default=None, help="Base seed")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    runner = SelfPlayRunner(
        SelfPlayConfig(max_plies=args.max_plies, base_seed=args.seed, log_every=max(1, args.games // 10))
    )
    results = runner.run_games(args.white, args.black, n_games=args.games)
    print(json.dumps(runner.summarize(results), indent=2))


if __name__ == "__main__":
    main()
