"""
Eduverse Portal API

Academic portal backend: assignments, notices, resources, submissions and
timetable entries behind one validation / filtering / persistence pipeline.
"""

__version__ = "1.0.0"
