"""
Task subsystem.

Components:
- task_models.py: Task data structure and API payloads
- task_repository.py: CRUD client for the task API
- task_list.py: in-memory list + staged (confirm-before-commit) delete
- task_form.py: create/edit form workflow
"""
