"""
VIGIL: event normalization and wire codec for monitoring pipelines.

Decodes binary wire messages into normalized event records, builds
events from option sets or runtime failures, and provides the matching
and set primitives used by downstream filtering.
"""

__version__ = "0.1.0"
