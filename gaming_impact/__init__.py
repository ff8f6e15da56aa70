"""Gaming Impact: state IO multipliers and casino revenue impact decomposition."""

__version__ = "0.1.0"
