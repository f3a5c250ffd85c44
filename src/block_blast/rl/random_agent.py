from __future__ import annotations

import argparse
import random
from typing import Optional

import gymnasium as gym

import block_blast.env  # noqa: F401  ensure registration
from block_blast.utils import configure_logging, get_logger


LOGGER = get_logger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None) -> dict:
    rng = random.Random(seed)
    env = gym.make("BlockBlast-8x8-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    best_score = 0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = info.get("valid_actions", [])
        if valid:
            action = rng.choice(valid)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_score = max(best_score, int(info["score"]))
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    return {"total_reward": total_reward, "episodes": episodes, "best_score": best_score}


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    configure_logging()
    stats = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {stats['total_reward']:.2f} "
          f"over {stats['episodes']} finished episode(s), best score {stats['best_score']}")


if __name__ == "__main__":  # pragma: no cover
    main()
