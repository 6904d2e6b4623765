"""Nearby event discovery and interest tracking.

Functional core lives in nearby.core, I/O in nearby.shell, and
NearbyEngine (nearby.engine) wires them together.
"""
