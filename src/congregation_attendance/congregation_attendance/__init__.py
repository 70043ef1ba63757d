"""Congregation Attendance package.

This package is organized by feature modules (members, attendance, reports,
followups, ...) with a thin Flask controller layer and service/repository
layers underneath.
"""
