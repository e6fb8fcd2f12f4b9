"""Domain layer — participants, command lines, message events, and wire payloads.

Pure types with no host or network dependencies.
"""
