"""Personal budgeting REST API."""
