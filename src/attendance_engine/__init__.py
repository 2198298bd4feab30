"""Attendance deduction engine.

Turns daily check-in/check-out records into payroll deductions, applies
the yearly allowance and monthly forgiveness rules, and rolls the results
up through line managers, departments and companies.
"""

__version__ = "0.1.0"
