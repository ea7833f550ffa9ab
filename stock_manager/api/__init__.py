"""HTTP API - routes and dependencies."""
