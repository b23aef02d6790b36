"""Availability Engine Test Suite

Test organization:
- unit/: Unit tests for individual components
  (intervals, models, config, time blocks, conflicts, find time,
  optimizer, goals)
- integration/: End-to-end planning flows across components

Running tests:
    # All tests
    pytest

    # One component
    pytest tests/unit/test_conflicts.py
"""
