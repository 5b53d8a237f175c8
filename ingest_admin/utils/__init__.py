"""
Utility functions module.

Filesystem helpers for the stage-then-rename flip and UTC timestamp
helpers for state records.
"""
