"""Benchmark suite for 2-D motion planners: environments, planners, metrics and statistics."""

__version__ = "0.1.0"