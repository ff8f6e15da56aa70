"""Static reference data: target sectors, states, CPI, NAICS concordance."""
