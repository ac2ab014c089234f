"""Home banner media catalog."""
