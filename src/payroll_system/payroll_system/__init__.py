"""Payroll System package.

Feature modules (employees, attendance, leaves, allowances, payroll, imports)
with service/repository layers and a thin Flask controller layer on top.
"""
