"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, enums, log entries)
- task_store.py: in-memory storage + validation
- task_query.py: search/filter view over the store
- task_scheduler.py: periodic pending-task notification scan
- task_api.py: session-gated boundary operations used by hosts
"""
