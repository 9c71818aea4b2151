"""Business logic: authorization policy, stores and uploads."""
