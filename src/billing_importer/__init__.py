"""
Billing Importer

Bulk-imports accounts and tokenized payment methods from CSV files into the
billing platform API, validating every postal address against the platform's
reference data before submission.
"""

__version__ = "1.0.0"
