"""chatplus — private messaging, block lists, and webhook audit for game sessions."""

__version__ = "0.1.0"
