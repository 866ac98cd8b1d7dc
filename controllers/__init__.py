"""
Controllers: the list state machine and its Flask handlers.
"""
