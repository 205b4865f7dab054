"""HRMS Lite package.

Organized by feature modules (employees, attendance, history, analytics)
with a thin Flask controller layer over service/repository layers.
"""
