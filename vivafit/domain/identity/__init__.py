"""
Identity Domain

Resolves the calling actor ({id, role}) from the session produced by the
auth boundary in vivafit/auth.py.
"""
