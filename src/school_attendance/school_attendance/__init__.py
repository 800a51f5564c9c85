"""School Attendance package.

Organized by feature modules (geofence, attendance, journals, permissions, ...)
with a thin Flask JSON controller layer over service/repository layers.
"""
