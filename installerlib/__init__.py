"""
Installation and lifecycle management of the agent's systemd units.

- `units`: registry of stable and experimental units
- `host`: capabilities through which tasks act on the host
- `plumbing`: single idempotent host actions, run by the installer or its privileged helper
- `tasks`: complete operations (setup, removal, experiments)
- `scripts`: console entry points
"""
