"""Export layer for session stats.

This package renders finished stats as CSV and delivers the table.
"""
