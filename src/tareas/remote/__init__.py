"""HTTP access to the tareas REST API."""
