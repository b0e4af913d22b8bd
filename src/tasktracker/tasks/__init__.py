"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskPriority)
- task_store.py: JSON-file storage + query helpers
- validation.py: payload validation shared by the front-ends
- task_api.py: small high-level helpers used by the HTTP API and the console
"""
