#!/usr/bin/env python3
"""Evaluate the search AI against a baseline policy."""

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict

import numpy as np
import yaml
from tqdm.auto import tqdm

from jump61.evaluation import (
    EvaluationConfig,
    RandomPolicy,
    SearchPolicy,
    evaluate_policies,
)
from jump61.search import SearchConfig


def load_config(path_str: str) -> Dict:
    path = Path(path_str)
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def build_config(args: argparse.Namespace) -> EvaluationConfig:
    cfg = load_config(args.config) if args.config else {}
    for key in ("episodes", "size", "max_ply", "depth", "baseline", "seed"):
        value = getattr(args, key)
        if value is not None:
            cfg[key] = value
    return EvaluationConfig(**cfg)


def run_evaluation(config: EvaluationConfig, *, ai_side: str = "red", progress: bool = True) -> Dict[str, object]:
    rng = np.random.default_rng(config.seed)
    ai_policy = SearchPolicy(SearchConfig(depth=config.depth))
    if config.baseline == "random":
        baseline_policy = RandomPolicy(rng)
    else:
        baseline_policy = SearchPolicy(SearchConfig(depth=1))

    policy_red, policy_blue = (ai_policy, baseline_policy) if ai_side == "red" else (baseline_policy, ai_policy)
    with tqdm(total=config.episodes, desc="Games", disable=not progress) as bar:
        result = evaluate_policies(
            policy_red,
            policy_blue,
            episodes=config.episodes,
            size=config.size,
            max_ply=config.max_ply,
            rng=rng,
            on_episode=lambda _: bar.update(1),
        )

    return {
        "config": asdict(config),
        "ai_side": ai_side,
        "games": result.games_played,
        "red_wins": result.red_wins,
        "blue_wins": result.blue_wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "red_winrate": result.winrate_red(),
        "blue_winrate": result.winrate_blue(),
    }


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/evaluate.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--size", type=int)
    parser.add_argument("--max-ply", dest="max_ply", type=int)
    parser.add_argument("--depth", type=int)
    parser.add_argument("--baseline", choices=["random", "shallow"])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--ai-side", choices=["red", "blue"], default="red")
    parser.add_argument("--no-progress", action="store_true")
    args = parser.parse_args()

    config = build_config(args)
    output = run_evaluation(config, ai_side=args.ai_side, progress=not args.no_progress)
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
