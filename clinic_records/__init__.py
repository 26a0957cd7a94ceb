"""Clinic Records: REST service over patient, user and clinical measurement records."""

__version__ = "1.0.0"
