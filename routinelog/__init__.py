"""Routine Log: data access for a personal habit and routine tracker on Firestore."""

__version__ = "0.1.0"
