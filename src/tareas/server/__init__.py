"""
Development server for the tareas REST API.

The app lives in ``tareas.server.main``; import it from there so that
importing this package has no side effects.
"""
