"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskList, User) and their JSON shape
- passwords.py: bcrypt hashing / verification
- task_store.py: in-memory store with whole-file JSON load/save
"""
