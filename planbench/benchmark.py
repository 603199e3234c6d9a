"""Running planning experiments from a JSON configuration and writing reports."""

from __future__ import annotations

import json
import os
import sys
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from planbench.environment import Environment, GridEnvironment
from planbench.grid_planners import (
    AStarPlanner,
    DijkstraPlanner,
    ThetaStarPlanner,
    WeightedAStarPlanner,
)
from planbench.heuristic import HeuristicType
from planbench.informed_rrt_star import InformedRRTStarPlanner
from planbench.map_generator import MapGenerator, MapGeneratorParams, MapGeneratorType
from planbench.metrics import MetricsCollector
from planbench.prm import LazyPRMPlanner, PRMPlanner
from planbench.rrt import RRTPlanner, RRTStarPlanner
from planbench.state import Planner, State
from planbench.statistics import confidence_interval_95, mean, std_dev

CSV_HEADER = (
    "planner,mean_path_length,std_path_length,mean_time_ms,std_time_ms,"
    "mean_nodes,success_rate,ci_low,ci_high"
)


class BenchmarkError(Exception):
    """Raised for unreadable or malformed benchmark configurations."""


def _rrt_args(params: Mapping[str, Any]) -> tuple[float, float, int]:
    return (
        float(params.get("step_size", 1.0)),
        float(params.get("goal_bias", 0.1)),
        int(params.get("max_iter", 5000)),
    )


def _prm_args(params: Mapping[str, Any]) -> tuple[int, int]:
    return int(params.get("num_samples", 500)), int(params.get("k_neighbors", 10))


_FACTORIES: dict[str, Callable[[Mapping[str, Any]], Planner]] = {
    "dijkstra": lambda p: DijkstraPlanner(),
    "astar": lambda p: AStarPlanner(),
    "weighted_astar": lambda p: WeightedAStarPlanner(
        HeuristicType.DIAGONAL, float(p.get("weight", 1.5))
    ),
    "thetastar": lambda p: ThetaStarPlanner(),
    "prm": lambda p: PRMPlanner(*_prm_args(p)),
    "lazy_prm": lambda p: LazyPRMPlanner(*_prm_args(p)),
    "rrt": lambda p: RRTPlanner(*_rrt_args(p)),
    "rrt_star": lambda p: RRTStarPlanner(
        *_rrt_args(p), float(p.get("rewiring_radius_factor", 10.0))
    ),
    "informed_rrt_star": lambda p: InformedRRTStarPlanner(
        *_rrt_args(p), float(p.get("rewiring_radius_factor", 10.0))
    ),
}


def create_planner(name: str, params: Mapping[str, Any] | None = None) -> Planner:
    """Build the planner called ``name``, configured from ``params``."""
    try:
        factory = _FACTORIES[name]
    except KeyError:
        raise BenchmarkError(f"unknown planner {name}") from None
    return factory(params or {})


def _generator_params(env_cfg: Mapping[str, Any]) -> MapGeneratorParams:
    try:
        width = int(env_cfg["width"])
        height = int(env_cfg["height"])
    except (KeyError, TypeError, ValueError) as exc:
        raise BenchmarkError(f"environment needs integer width and height: {exc}") from exc
    kind = (
        MapGeneratorType.MAZE
        if env_cfg.get("generator", "random_uniform") == "maze"
        else MapGeneratorType.RANDOM_UNIFORM
    )
    return MapGeneratorParams(
        width=width,
        height=height,
        obstacle_density=float(env_cfg.get("obstacle_density", 0.2)),
        seed=int(env_cfg.get("seed", 42)),
        type=kind,
    )


def _grid_state(point: Sequence[Any]) -> State:
    """A grid state from an ``[x, y]`` pair: x is the column, y the row."""
    try:
        return State.grid(int(point[1]), int(point[0]))
    except (TypeError, IndexError, ValueError) as exc:
        raise BenchmarkError(f"invalid position {point!r}") from exc


def _results_base(config_path: str) -> str:
    return os.path.splitext(config_path)[0]


class BenchmarkEngine:
    """Runs every experiment of a configuration file and writes JSON and CSV results."""

    def __init__(self) -> None:
        self.collector = MetricsCollector()

    def run(self, config_path: str) -> list[dict[str, Any]]:
        """Run the experiments in ``config_path`` and return their summaries.

        Results go to ``<base>_results.json`` and ``<base>_results.csv`` next to
        the configuration. Experiments naming an unknown planner are skipped.
        """
        try:
            with open(config_path, encoding="utf-8") as fh:
                config = json.load(fh)
        except OSError as exc:
            raise BenchmarkError(f"cannot open config {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise BenchmarkError(f"invalid JSON: {exc}") from exc

        experiments = config.get("experiments") if isinstance(config, dict) else None
        if not isinstance(experiments, list):
            raise BenchmarkError("config must contain 'experiments' array")

        results = []
        for experiment in experiments:
            try:
                results.append(self._run_experiment(experiment))
            except BenchmarkError as exc:
                if not str(exc).startswith("unknown planner"):
                    raise
                print(f"Error: {exc}", file=sys.stderr)

        base = _results_base(config_path)
        with open(base + "_results.json", "w", encoding="utf-8") as fh:
            json.dump({"results": results}, fh, indent=2)
        with open(base + "_results.csv", "w", encoding="utf-8") as fh:
            fh.write(CSV_HEADER + "\n")
            for r in results:
                fields = [
                    r["planner"], r["mean_path_length"], r["std_path_length"],
                    r["mean_time_ms"], r["std_time_ms"], r["mean_nodes"],
                    r["success_rate"], r["ci_time_ms"][0], r["ci_time_ms"][1],
                ]
                fh.write(",".join(json.dumps(v) for v in fields) + "\n")
        print(f"Results written to {base}_results.json and .csv")
        return results

    def _run_experiment(self, experiment: Mapping[str, Any]) -> dict[str, Any]:
        if "environment" not in experiment:
            raise BenchmarkError("experiment needs an 'environment'")
        env = MapGenerator().generate(_generator_params(experiment["environment"]))

        name = experiment.get("planner", "astar")
        planner = create_planner(name, experiment.get("planner_params", {}))

        try:
            start = _grid_state(experiment["start"])
            goal = _grid_state(experiment["goal"])
        except KeyError as exc:
            raise BenchmarkError(f"experiment needs {exc}") from exc
        repeats = int(experiment.get("repeats", 30))
        if repeats < 1:
            raise BenchmarkError("repeats must be positive")

        lengths: list[float] = []
        times: list[float] = []
        nodes: list[float] = []
        successes = 0
        for _ in range(repeats):
            t0 = time.perf_counter()
            path = planner.solve(env, start, goal)
            ms = (time.perf_counter() - t0) * 1000.0
            m = self.collector.collect(path, ms, planner.nodes_expanded, env)
            successes += m.success
            lengths.append(m.path_length)
            times.append(ms)
            nodes.append(float(m.nodes_expanded))

        return {
            "planner": name,
            "mean_path_length": mean(lengths),
            "std_path_length": std_dev(lengths),
            "mean_time_ms": mean(times),
            "std_time_ms": std_dev(times),
            "mean_nodes": mean(nodes),
            "success_rate": successes / repeats,
            "ci_path_length": list(confidence_interval_95(lengths)),
            "ci_time_ms": list(confidence_interval_95(times)),
            "repeats": repeats,
        }


_SUMMARY_KEYS = (
    "planner", "mean_path_length", "std_path_length",
    "mean_time_ms", "mean_nodes", "success_rate",
)


def run_benchmark(config_path: str) -> list[dict[str, Any]]:
    """Run a configuration and return the main figures of each experiment."""
    BenchmarkEngine().run(config_path)
    with open(_results_base(config_path) + "_results.json", encoding="utf-8") as fh:
        document = json.load(fh)
    return [
        {key: r.get(key, "" if key == "planner" else 0.0) for key in _SUMMARY_KEYS}
        for r in document.get("results", [])
    ]


def run_experiment(
    env: Environment, planner: Planner, start: State, goal: State, repeats: int = 10
) -> dict[str, float]:
    """Solve one problem ``repeats`` times and summarise success, length and time."""
    if repeats < 1:
        raise ValueError("repeats must be positive")
    successes = 0
    total_length = 0.0
    total_time = 0.0
    for _ in range(repeats):
        t0 = time.perf_counter()
        path = planner.solve(env, start, goal)
        total_time += (time.perf_counter() - t0) * 1000.0
        if path.success:
            successes += 1
            total_length += path.length
    return {
        "success_rate": successes / repeats,
        "mean_path_length": total_length / successes if successes else 0.0,
        "mean_time_ms": total_time / repeats,
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: ``benchmark --config <config.json>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: benchmark --config <config.json>", file=sys.stderr)
        return 1
    config_path = next(
        (value for flag, value in zip(args, args[1:]) if flag == "--config"), ""
    )
    if not config_path:
        print("Error: --config required", file=sys.stderr)
        return 1
    try:
        BenchmarkEngine().run(config_path)
    except BenchmarkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())