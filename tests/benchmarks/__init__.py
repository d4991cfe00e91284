"""Dispatch latency benchmarks (pytest-benchmark).

    pytest tests/benchmarks/ --benchmark-sort=median
    pytest tests/benchmarks/ --benchmark-disable   # run as plain tests
"""
