"""
DijiBill Documents
==================
Template rendering and ZATCA compliance QR encoding for receipts,
invoices, quotes and reports.
"""

__version__ = "1.0.0"
