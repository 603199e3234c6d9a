import json
import math

import pytest

from planbench.benchmark import (
    CSV_HEADER,
    BenchmarkEngine,
    BenchmarkError,
    create_planner,
    main,
    run_benchmark,
    run_experiment,
)
from planbench.environment import GridEnvironment
from planbench.grid_planners import AStarPlanner, WeightedAStarPlanner
from planbench.prm import PRMPlanner
from planbench.rrt import RRTStarPlanner
from planbench.state import State


def _write_config(tmp_path, experiments, name="config.json"):
    path = tmp_path / name
    path.write_text(json.dumps({"version": 1, "experiments": experiments}))
    return path


def _grid_experiment(planner="astar", **overrides):
    exp = {
        "environment": {
            "type": "grid", "width": 10, "height": 10,
            "generator": "random_uniform", "obstacle_density": 0.0, "seed": 42,
        },
        "planner": planner,
        "start": [0, 0],
        "goal": [9, 9],
        "repeats": 3,
    }
    exp.update(overrides)
    return exp


def test_run_from_config(tmp_path):
    config = _write_config(tmp_path, [{
        "environment": {"type": "grid", "width": 10, "height": 10,
                        "generator": "random_uniform", "obstacle_density": 0.1,
                        "seed": 42},
        "planner": "astar",
        "start": [0, 0],
        "goal": [9, 9],
        "repeats": 5,
    }])
    results = BenchmarkEngine().run(str(config))
    assert results[0]["planner"] == "astar"
    assert results[0]["repeats"] == 5
    content = (tmp_path / "config_results.json").read_text()
    assert "results" in content
    assert "astar" in content
    document = json.loads(content)
    assert document["results"][0]["repeats"] == 5


def test_empty_grid_results(tmp_path):
    config = _write_config(tmp_path, [_grid_experiment("dijkstra")])
    results = BenchmarkEngine().run(str(config))
    assert len(results) == 1
    r = results[0]
    assert r["planner"] == "dijkstra"
    assert r["success_rate"] == 1.0
    assert r["mean_path_length"] == pytest.approx(9 * math.sqrt(2))
    assert r["std_path_length"] == pytest.approx(0.0)
    assert r["mean_nodes"] > 0
    assert r["ci_time_ms"][0] <= r["ci_time_ms"][1]


def test_csv_written(tmp_path):
    config = _write_config(tmp_path, [_grid_experiment("astar")])
    results = BenchmarkEngine().run(str(config))
    assert results[0]["success_rate"] == 1.0
    lines = (tmp_path / "config_results.csv").read_text().splitlines()
    assert lines[0] == CSV_HEADER
    assert len(lines) == 2
    fields = lines[1].split(",")
    assert fields[0] == '"astar"'
    assert float(fields[6]) == 1.0


def test_maze_experiment_finds_path(tmp_path):
    exp = _grid_experiment(
        "astar",
        environment={"width": 4, "height": 4, "generator": "maze", "seed": 42},
        start=[1, 1],
        goal=[7, 7],
    )
    results = BenchmarkEngine().run(str(_write_config(tmp_path, [exp])))
    assert results[0]["success_rate"] == 1.0


def test_unknown_planner_is_skipped(tmp_path):
    config = _write_config(
        tmp_path, [_grid_experiment("nonexistent"), _grid_experiment("thetastar")]
    )
    results = BenchmarkEngine().run(str(config))
    assert [r["planner"] for r in results] == ["thetastar"]


def test_missing_config_raises(tmp_path):
    with pytest.raises(BenchmarkError):
        BenchmarkEngine().run(str(tmp_path / "absent.json"))


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(BenchmarkError):
        BenchmarkEngine().run(str(path))


def test_missing_experiments_raises(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"version": 1}))
    with pytest.raises(BenchmarkError):
        BenchmarkEngine().run(str(path))


def test_missing_width_raises(tmp_path):
    exp = _grid_experiment(environment={"height": 5})
    with pytest.raises(BenchmarkError):
        BenchmarkEngine().run(str(_write_config(tmp_path, [exp])))


def test_create_planner_params():
    w = create_planner("weighted_astar", {"weight": 2.5})
    assert isinstance(w, WeightedAStarPlanner)
    assert w.weight == 2.5
    prm = create_planner("prm", {"num_samples": 50, "k_neighbors": 4})
    assert isinstance(prm, PRMPlanner)
    assert (prm.num_samples, prm.k_neighbors) == (50, 4)
    rrt_star = create_planner("rrt_star", {"rewiring_radius_factor": 7.0})
    assert isinstance(rrt_star, RRTStarPlanner)
    assert rrt_star.gamma == 7.0
    assert rrt_star.step_size == 1.0
    assert rrt_star.max_iter == 5000


def test_create_planner_defaults():
    planner = create_planner("astar", {})
    assert isinstance(planner, AStarPlanner)
    path = planner.solve(GridEnvironment(5, 5), State.grid(0, 0), State.grid(4, 4))
    assert path.success is True
    assert path.length == pytest.approx(4 * math.sqrt(2))


def test_create_planner_unknown():
    with pytest.raises(BenchmarkError):
        create_planner("teleport", {})


def test_run_benchmark_summary(tmp_path):
    config = _write_config(tmp_path, [_grid_experiment("astar")])
    summaries = run_benchmark(str(config))
    assert len(summaries) == 1
    assert summaries[0]["planner"] == "astar"
    assert summaries[0]["success_rate"] == 1.0
    assert set(summaries[0]) == {
        "planner", "mean_path_length", "std_path_length",
        "mean_time_ms", "mean_nodes", "success_rate",
    }


def test_run_experiment_empty_grid():
    env = GridEnvironment(10, 10)
    metrics = run_experiment(env, AStarPlanner(), State.grid(0, 0), State.grid(9, 9), 3)
    assert metrics["success_rate"] == 1.0
    assert metrics["mean_path_length"] == pytest.approx(9 * math.sqrt(2))
    assert metrics["mean_time_ms"] >= 0.0


def test_run_experiment_blocked_goal():
    occupancy = [[0] * 5 for _ in range(5)]
    occupancy[4][4] = 1
    env = GridEnvironment(5, 5, occupancy)
    metrics = run_experiment(env, AStarPlanner(), State.grid(0, 0), State.grid(4, 4), 2)
    assert metrics["success_rate"] == 0.0
    assert metrics["mean_path_length"] == 0.0


def test_main_without_arguments():
    assert main([]) == 1


def test_main_without_config_flag():
    assert main(["--verbose", "x"]) == 1


def test_main_runs_config(tmp_path):
    config = _write_config(tmp_path, [_grid_experiment("astar")])
    assert main(["--config", str(config)]) == 0
    assert (tmp_path / "config_results.json").exists()


def test_main_reports_bad_config(tmp_path):
    assert main(["--config", str(tmp_path / "absent.json")]) == 1