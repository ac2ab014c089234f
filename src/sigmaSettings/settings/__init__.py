"""User settings storage, schema and migrations."""
