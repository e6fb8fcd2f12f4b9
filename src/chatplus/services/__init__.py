"""Service layer — targeting, blocking, relay, and audit for private messages.

INVARIANT: All command handlers return CommandResult.
"""
