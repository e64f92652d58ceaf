#!/usr/bin/env python3
import argparse
import json
import logging
import time
from pathlib import Path

from simplex_optimizer.lp.instances import generate_random_problem
from simplex_optimizer.lp.simplex import simplex_solve
from simplex_optimizer.schemas import LPProblem, SolveOptions


def load_example(name: str) -> LPProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return LPProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    parser = argparse.ArgumentParser(description="Time the simplex solver on sample problems.")
    parser.add_argument("--pivot-rule", choices=["dantzig", "bland"], default="dantzig")
    parser.add_argument("--size", type=int, default=3, help="Variables and constraints per random instance")
    parser.add_argument("--verbose", action="store_true", help="Log every pivot")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    opts = SolveOptions(pivot_rule=args.pivot_rule)
    cases = [("examples/small_lp.json", load_example("small_lp.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_problem(args.size, args.size, seed)))

    print("name,status,objective,iterations,time_ms")
    for name, problem in cases:
        start = time.perf_counter()
        solution = simplex_solve(problem, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(
            f"{name},{solution.status},{solution.objective_value},{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
