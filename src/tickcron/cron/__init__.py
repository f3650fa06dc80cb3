"""
Cron subsystem.

Components:
- rules.py: rule grammar, time decomposition and matching
- task_models.py: data structures (Task, Rule)
- task_registry.py: synchronized in-memory task registry
- tick_loop.py: per-second loop that dispatches matching tasks
- cron_api.py: process-wide scheduler and the add/remove helpers
"""
