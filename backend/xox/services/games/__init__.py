"""Game domain services: move validation, line scoring and clear timers.

This package contains the pure game mechanics used by the socket
handlers, keeping transport concerns separated from the rules.
"""
