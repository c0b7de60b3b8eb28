"""Business logic: repository, sorting and validation."""
