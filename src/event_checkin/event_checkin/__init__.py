"""Event Check-in package.

Feature modules (participants, attendance, geo, stats, reports, passes, admin)
each keep a thin Flask controller on top of plain service/repository layers.
"""
