"""Backend package for the agent competition arena.

This package contains the agent economic model, the in-memory registry,
the simulation/evaluation engine, the interval scheduler, and the API routes.
"""
