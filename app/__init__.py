"""Complaint timeline and notification service for the grievance portal."""
