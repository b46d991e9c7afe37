"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, TaskIdAllocator)
- task_codec.py: one task <-> one delimited text line
- task_file.py: flat-file load/save
- task_store.py: in-memory ordered store with sort/filter and persist-on-mutation
"""
