"""Ports (Protocols) for collaborators injected into the scheduler."""
