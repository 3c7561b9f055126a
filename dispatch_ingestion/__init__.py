"""
Dispatch Ingestion Service
==========================

Bulk upload of dispatch records from CSV and Excel files.

Features:
- Strict template uploads with all-or-nothing commit
- Smart multi-sheet uploads with header synonym matching
- Pre-upload file analysis

"""

__version__ = "1.0.0"
