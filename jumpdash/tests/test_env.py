# jumpdash/tests/test_env.py
"""
Quick tests for JumpDashEnv (Gymnasium environment).

Usage (from repo root):
  python -m jumpdash.tests.test_env
  python -m jumpdash.tests.test_env --render
  python -m jumpdash.tests.test_env --no-api-check
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from jumpdash.env.jd_env import JumpDashEnv
from experiments.sanity_rollout import tiny_heuristic_policy_init


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = JumpDashEnv(frame_skip=4)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke(steps: int = 300, seed: int = 123):
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = JumpDashEnv(frame_skip=4)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed
        env.action_space.seed(seed)
        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term:
                assert r == -1.0
                break
    finally:
        env.close()


def test_determinism(steps: int = 300, seed: int = 123):
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = JumpDashEnv(frame_skip=4)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")


def test_noop_eventually_dies():
    env = JumpDashEnv(frame_skip=4, time_limit_seconds=None)
    try:
        env.reset(seed=7)
        for _ in range(2000):
            _, r, term, _, info = env.step(0)
            if term:
                break
        assert term, "standing still should hit an obstacle"
        assert r == -1.0
    finally:
        env.close()


def test_heuristic_clears_obstacles():
    policy = tiny_heuristic_policy_init()
    for seed in (1, 2, 3):
        env = JumpDashEnv(frame_skip=4, time_limit_seconds=20.0)
        try:
            obs, _ = env.reset(seed=seed)
            term = trunc = False
            while not (term or trunc):
                obs, _, term, trunc, info = env.step(policy(obs))
            assert not term, f"heuristic died on seed {seed} at score {info['score']}"
            assert trunc
        finally:
            env.close()


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short heuristic demo so you can visually verify behavior."""
    env = JumpDashEnv(render_mode="human", frame_skip=frame_skip)
    policy = tiny_heuristic_policy_init()
    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps):
            obs, r, term, trunc, info = env.step(policy(obs))
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            test_api_check()
            print("✓ API check ok")
        test_smoke(steps=args.steps, seed=args.seed)
        print("✓ Smoke test ok")
        test_determinism(steps=args.steps, seed=args.seed)
        print("✓ Determinism ok")
        test_noop_eventually_dies()
        print("✓ NOOP dies ok")
        test_heuristic_clears_obstacles()
        print("✓ Heuristic survives ok")
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=4)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
