"""Deterministic multiplier engine.

Offline: requirements -> coefficients -> multipliers, batched per state.
Request time: impact decomposition over precomputed MultiplierRecords.
"""
