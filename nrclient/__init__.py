"""Client library for the New Relic REST, Synthetics and NerdGraph APIs."""

__version__ = "0.1.0"