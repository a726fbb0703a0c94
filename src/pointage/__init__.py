"""Pointage — employee time-clock API.

Users authenticate with login/password and receive a JWT, employees
check in and out, and administrators manage employee and check records.
"""

__version__ = "0.1.0"
