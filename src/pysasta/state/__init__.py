"""State/store layer.

This package is the single place where portal collections are read from and
written to a storage area, and where changes are announced to every open
session.
"""
