"""Infrastructure Layer — database sessions, token signing, password hashing, logging.

Invariants:
    - Everything that touches a driver, a clock-bound secret, or a crypto primitive lives here
    - Errors raised here are TaskBoardError subclasses (core/errors.py)
"""
