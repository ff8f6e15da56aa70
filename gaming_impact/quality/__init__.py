"""Data-quality checks over computed multiplier tables.

Warnings are recorded alongside results and never block persistence.
"""
