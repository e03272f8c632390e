"""Attendance Book package.

Organized by feature modules (roster, attendance, history, users, ...) with a
thin Flask controller layer on top of service/repository layers. Storage is
reached only through repository Protocols, so the same services run against
MySQL, a json-server style REST API or process memory.
"""
