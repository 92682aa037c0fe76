"""
Tareas: task manager client.

Two slices share the same screens: a remote one talking to the tareas REST
API (``tareas.viewmodels.remote``) and a local one backed by SQLite
(``tareas.viewmodels.local``).
"""

__version__ = "0.1.0"
