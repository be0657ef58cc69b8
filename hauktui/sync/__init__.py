"""Sync — keeping a project's copied components aligned with the registry.

This package provides the primitives for:
- Installing: copying template files and recording their hashes
- Drift detection: comparing local, installed and upstream file contents
- Updates: refreshing installed components to newer registry versions
"""
