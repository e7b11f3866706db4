"""Integrations package - File reading and geocoding.

Modules:
    - csv_importer: CSV/XLSX export files to string-keyed rows
    - geocode: Fixed city coordinate table with jitter
"""
