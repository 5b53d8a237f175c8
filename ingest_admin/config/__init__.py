"""
Configuration for the ingest admin tool.

Layout names and logging options, resolved from defaults, an optional YAML
file and command-line overrides.
"""
