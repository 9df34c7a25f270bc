"""Swarm engine: particle components, per-sweep steps and the runner.

`core` is not imported here so that `sipso.config` can read the constants
module without pulling in the runner.
"""
