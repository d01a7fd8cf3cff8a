"""Core services: column classification, row grouping, name resolution and the table pipeline."""
