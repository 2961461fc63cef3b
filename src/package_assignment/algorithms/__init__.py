"""Pure package assignment algorithms: range validation, selection, decomposition."""
