"""
Evaluation script for scripted policies on the arena environment
"""

import argparse
import logging
import math
from typing import Callable, Dict, Optional

import numpy as np

from game.arena import ArenaEnv

Policy = Callable[[ArenaEnv], np.ndarray]


def random_policy(env: ArenaEnv) -> np.ndarray:
    """Uniformly random action"""
    return env.action_space.sample()


def aim_policy(env: ArenaEnv, danger_radius: float = 150.0) -> np.ndarray:
    """
    Shoot at the nearest enemy; step away from it once it gets close.
    Stays put and holds fire when the field is empty.
    """
    state = env.game.state
    p = state.player
    enemies = state.entities.enemies
    if not enemies:
        return np.array([0, 0, 0], dtype=np.int64)

    target = min(enemies, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2)
    aim = env.aim_index(target.x, target.y)

    move = 0
    if math.hypot(target.x - p.x, target.y - p.y) < danger_radius:
        dx, dy = p.x - target.x, p.y - target.y
        if abs(dx) >= abs(dy):
            move = 4 if dx > 0 else 3
        else:
            move = 2 if dy > 0 else 1

    return np.array([move, 1, aim], dtype=np.int64)


POLICIES: Dict[str, Policy] = {
    "random": random_policy,
    "aim": aim_policy,
}


def evaluate_policy(
    policy: str = "aim",
    n_episodes: int = 10,
    seed: Optional[int] = None,
    max_steps: Optional[int] = None,
    render: bool = False,
    verbose: bool = True,
):
    """
    Run a scripted policy for several episodes and summarise the results

    Args:
        policy: Name of the policy ('random' or 'aim')
        n_episodes: Number of episodes to evaluate
        seed: Base random seed (episode i uses seed + i)
        max_steps: Episode length cap, defaults to the env's
        render: Whether to render the environment
        verbose: Print per-episode lines
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    act = POLICIES[policy]

    env_kwargs = {"render_mode": "human" if render else None}
    if max_steps is not None:
        env_kwargs["max_steps"] = max_steps
    env = ArenaEnv(**env_kwargs)
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards = []
    episode_lengths = []
    episode_scores = []
    episode_levels = []
    deaths = 0

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = act(env)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        deaths += int(terminated)
        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])
        episode_levels.append(info["level"])

        if verbose:
            print(f"Episode {episode + 1}/{n_episodes}: "
                  f"Reward = {total_reward:.2f}, Length = {steps}, "
                  f"Score = {info['score']}, Level = {info['level']}")

    env.close()

    results = {
        "policy": policy,
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
        "max_level": int(np.max(episode_levels)),
        "death_rate": deaths / max(1, n_episodes),
        "episode_rewards": episode_rewards,
        "episode_scores": episode_scores,
    }

    if verbose:
        print("\n" + "=" * 50)
        print(f"Evaluation Results - {policy} policy ({n_episodes} episodes):")
        print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
        print(f"Mean Episode Length: {results['mean_length']:.1f}")
        print(f"Mean Score: {results['mean_score']:.1f}  Max Level: {results['max_level']}")
        print(f"Death Rate: {results['death_rate']:.0%}")
        print("=" * 50)

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate a scripted policy on the arena shooter")
    parser.add_argument(
        "--policy",
        type=str,
        default="aim",
        choices=sorted(POLICIES),
        help="Policy to run",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base random seed",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Episode length cap in ticks",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Show the episodes in an Arcade window",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate the random policy and print the difference",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)

    results = evaluate_policy(
        policy=args.policy,
        n_episodes=args.n_episodes,
        seed=args.seed,
        max_steps=args.max_steps,
        render=args.render,
    )

    if args.compare_random and args.policy != "random":
        print("\n")
        random_results = evaluate_policy(
            policy="random",
            n_episodes=args.n_episodes,
            seed=args.seed,
            max_steps=args.max_steps,
        )
        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
