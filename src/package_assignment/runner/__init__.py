"""Configuration, catalog loading, order aggregation and the command line."""
