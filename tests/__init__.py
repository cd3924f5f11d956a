"""Test package for the magic square puzzle core.

The tests exercise generation, validation, scoring, daily challenges,
achievements and a scripted headless game session. Time comes from a fake
clock and randomness from fixed sequences, so every test is deterministic.
To run these tests, execute ``pytest`` from the project root.
"""
