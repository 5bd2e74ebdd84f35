"""
Directory watching

- guard: per-file claim set shared by processing tasks
- filesystem: watchdog handler and observer orchestration
"""

__all__ = ["filesystem", "guard"]
