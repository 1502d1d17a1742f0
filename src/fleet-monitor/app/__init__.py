"""Fleet Monitor service: multi-cluster game server build aggregation."""
