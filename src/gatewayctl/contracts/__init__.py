"""OpenAPI contract loading, path normalization and route validation."""
