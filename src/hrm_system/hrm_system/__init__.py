"""HRM System package.

This package is organized by feature modules (employees, attendance, leaves, ...)
with a thin Flask JSON controller layer and service/repository layers underneath.
"""
