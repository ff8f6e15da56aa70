"""CPI-U annual averages (All Urban Consumers, All Items).

Source: BLS series CUUR0000SA0. The StateIO tables are 2019 vintage, so
employment coefficients are in 2019 dollars.
"""

CPI_BASE_YEAR = 2019

CPI_ANNUAL_AVG: dict[int, float] = {
    2019: 254.412,
    2020: 257.557,
    2021: 266.236,
    2022: 288.347,
    2023: 302.408,
    2024: 312.145,
    2025: 320.229,
}
