"""CSV -> XLSX conversion with currency, numeric and integer column formats."""

__version__ = "1.2.0"
