# planbench

A benchmark suite for 2-D motion planners. It provides occupancy-grid and
polygon-obstacle environments, a seeded map generator, search planners for
grids, sampling planners for bounded workspaces, per-run path metrics, and
summary statistics with 95 % confidence intervals.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `planbench.state`: `State` (position, optional heading `theta`, optional
  grid cell; `State.grid(row, col)` builds a grid state), `Path` (`states`,
  `success`, `length`, `compute_length()`, `empty()`), `distance(a, b)`, and
  the abstract `Planner` with `solve(env, start, goal)` and `nodes_expanded`.
- `planbench.polygon`: `Point2D` and `Polygon` (`contains`, `bounding_box`,
  `edges`).
- `planbench.collision`: `ContinuousCollisionChecker`,
  `GridCollisionChecker` (Bresenham `line_of_sight`), `segments_intersect`
  and `point_to_segment_distance`.
- `planbench.kdtree`: `KdTree2D` with `nearest`, `k_nearest` and
  `radius_search`.
- `planbench.environment`: the abstract `Environment` and
  `GridEnvironment`, `ContinuousEnvironment` and `SE2Environment`.
- `planbench.map_generator`: `MapGenerator`, `MapGeneratorParams` and
  `MapGeneratorType`.
- `planbench.heuristic`: `manhattan`, `euclidean`, `diagonal` and
  `HeuristicType`.
- `planbench.grid_planners`, `planbench.prm`, `planbench.rrt` and
  `planbench.informed_rrt_star`: the planners listed below.
- `planbench.metrics`: `MetricsCollector.collect(path, time_ms,
  nodes_expanded, env)` returns `Metrics` with path length, time, expansions,
  success, smoothness, minimum clearance and bending energy.
- `planbench.statistics`: `mean`, `std_dev` (sample standard deviation) and
  `confidence_interval_95` (Student t for up to 30 values, 1.96 above).
- `planbench.benchmark`: `BenchmarkEngine`, `create_planner`,
  `run_benchmark`, `run_experiment` and the `planbench` command.

## Planners

| Name in configs      | Class                     | Works on                     |
|----------------------|---------------------------|------------------------------|
| `dijkstra`           | `DijkstraPlanner`         | `GridEnvironment`            |
| `astar`              | `AStarPlanner`            | `GridEnvironment`            |
| `weighted_astar`     | `WeightedAStarPlanner`    | `GridEnvironment`            |
| `thetastar`          | `ThetaStarPlanner`        | `GridEnvironment`            |
| `prm`                | `PRMPlanner`              | any environment with bounds  |
| `lazy_prm`           | `LazyPRMPlanner`          | any environment with bounds  |
| `rrt`                | `RRTPlanner`              | any environment with bounds  |
| `rrt_star`           | `RRTStarPlanner`          | any environment with bounds  |
| `informed_rrt_star`  | `InformedRRTStarPlanner`  | any environment with bounds  |

Grid planners search 8-connected moves and return an unsuccessful, empty
`Path` when given another kind of environment or when the start or goal cell
is occupied. Sampling planners return an empty `Path` when the environment
has no bounds. They use a fixed random seed, so the same call gives the same
result every time. `InformedRRTStarPlanner` also records the best cost per
iteration in `convergence_data`, and computes `gap_to_optimal` when
`optimal_cost` is set.

## Using the library

```python
from planbench.environment import GridEnvironment, ContinuousEnvironment
from planbench.polygon import Point2D, Polygon
from planbench.state import State
from planbench.grid_planners import AStarPlanner
from planbench.rrt import RRTStarPlanner

grid = GridEnvironment(10, 10)
path = AStarPlanner().solve(grid, State.grid(0, 0), State.grid(9, 9))
print(path.success, path.length, len(path.states))

wall = Polygon([Point2D(4, 3), Point2D(5, 3), Point2D(5, 7), Point2D(4, 7)])
space = ContinuousEnvironment(0, 10, 0, 10, [wall])
path = RRTStarPlanner(step_size=0.8, max_iter=3000).solve(
    space, State(2, 5), State(8, 5)
)
```

To generate maps:

```python
from planbench.map_generator import MapGenerator, MapGeneratorParams, MapGeneratorType

env = MapGenerator().generate(
    MapGeneratorParams(width=4, height=4, seed=42, type=MapGeneratorType.MAZE)
)
```

A maze of `w × h` cells becomes a `(2w+1) × (2h+1)` occupancy grid in which
every cell is reachable. Random uniform maps leave the start corner and the
goal corner free. A seed of 0 in the parameters falls back to the generator's
own seed. `GridEnvironment.to_json()` and `GridEnvironment.from_json()` save
and load a grid; `ContinuousEnvironment.from_json()` loads a polygon world.

## Running a benchmark

Write a JSON config with an `experiments` array:

```json
{
  "experiments": [{
    "environment": {"width": 10, "height": 10,
                    "generator": "random_uniform",
                    "obstacle_density": 0.1, "seed": 42},
    "planner": "astar",
    "planner_params": {},
    "start": [0, 0],
    "goal": [9, 9],
    "repeats": 5
  }]
}
```

Then run:

```
planbench --config experiments.json
```

`start` and `goal` are `[x, y]` grid cells (x is the column, y the row).
`generator` set to `maze` gives a maze; any other value gives a random uniform
map. Defaults: `obstacle_density` 0.2, `seed` 42, `planner` `astar`,
`repeats` 30. The `planner_params` keys are `weight`, `num_samples`,
`k_neighbors`, `step_size`, `goal_bias`, `max_iter` and
`rewiring_radius_factor`, used by the planners that take them.

Results go next to the config as `experiments_results.json` and
`experiments_results.csv`. The JSON holds, per experiment, the mean and
standard deviation of path length and time, the mean number of expanded
nodes, the success rate, the repeat count and 95 % confidence intervals of
path length and time. The CSV's `ci_low` and `ci_high` columns are the
interval of the time.

An experiment naming an unknown planner is reported on standard error and
skipped. A missing or unreadable config, invalid JSON or a malformed
experiment raises `BenchmarkError`; the command prints the error and exits
with status 1.

From Python, `planbench.benchmark.run_benchmark(config_path)` runs a config
and returns the planner, mean path length, standard deviation of path length,
mean time, mean nodes and success rate of each experiment.
`planbench.benchmark.run_experiment(env, planner, start, goal, repeats)`
times one planner on one environment and returns its success rate, mean
length of successful paths and mean time.

## Limitations

- Benchmark configs only build occupancy grids from the map generator;
  polygon and SE(2) environments can be used from Python but not from a
  config.
- The map generator builds random uniform maps and mazes only; the other
  `MapGeneratorType` members produce random uniform maps.
- `GridEnvironment.clearance` always returns 0, and `Metrics.memory_bytes`
  is not measured.