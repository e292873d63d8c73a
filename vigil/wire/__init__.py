"""
Binary wire format for VIGIL messages.

Declares the protobuf schema of the message frame and wraps encoding
and decoding with time normalization and length-prefixed framing.
"""
