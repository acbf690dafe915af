"""Internship Portal package.

This package is organized by feature modules (users, departments, mentors,
students, internships, ...) with a thin Flask controller layer on top of
service and repository layers.
"""
