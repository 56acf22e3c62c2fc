"""Attendance Tracker package.

Feature modules (users, sessions, students, attendance, scanner) each carry a
model, a repository interface with its MySQL implementation, a service and a
thin Flask controller.
"""
