"""Event log reports."""
