"""Dojo attendance register.

This package is organized by feature modules (students, attendance, reports, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
