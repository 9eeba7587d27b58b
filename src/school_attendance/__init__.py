"""School attendance tracker.

The package is organized by feature modules (auth, users, students,
attendance, settings, dashboard) with a thin Flask controller layer on top of
service/repository layers.
"""
