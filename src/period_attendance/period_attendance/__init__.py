"""Period Attendance package.

Feature modules (periods, absences, attendance, reports, ...) each hold a
plain-data model, a repository protocol, pure rule functions and a service,
with a thin Flask controller layer on top.
"""
