"""
Higher-level methods to install and manage the agent.

Each public function in this module should:

- perform a complete task, as needed by a script or user action
- avoid non-idempotent calls unless required by a prior state change
- act on the host only through the `Host` it is given
"""
