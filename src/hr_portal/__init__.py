"""HR portal package.

Feature modules (absences, probation, team_calendar, ...) follow the same
layout: plain dataclass models, repository protocols with MySQL
implementations, service classes holding the business rules and a thin Flask
controller on top.
"""
