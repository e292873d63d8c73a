"""
Core event model for VIGIL.

Contains the event and message records, the injectable clock, time
normalization, event construction, predicate matching, tag set
operations and tolerant numeric comparison.
"""
