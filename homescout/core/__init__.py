"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Tool names, dataset name prefixes, amenity categories, drive bands
- exceptions: Custom exception hierarchy
- ingress: HTTP request parsing and blob client factory
"""
