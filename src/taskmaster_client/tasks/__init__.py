"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskPayload, Priority, StatusFilter)
- task_filters.py: status filter + search, aggregate counts
- task_form.py: controlled form producing a validated TaskPayload
- task_list.py: list controller (fetch, filter, create/update/toggle/delete, edit state)
- dashboard.py: dashboard statistics
"""
