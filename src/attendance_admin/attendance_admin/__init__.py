"""Attendance Admin package.

This package is organized by feature modules (payroll, attendance,
adjustments, overrides, ...) on top of a small transport/endpoint layer that
talks to the HR backend, with a thin Flask controller layer on top.
"""
