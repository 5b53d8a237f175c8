"""
State record persistence and the lock transition.

Moves a root from inbound to locked through PENDING → LOCKED, or
PENDING → FAILED when the rename fails, and resumes from the record.
"""
