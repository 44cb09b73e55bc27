"""Service layer: the operations an HTTP layer or the CLI invokes."""
