"""Walkalytics API endpoints.

Each subdirectory is one API with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # Endpoint paths and defaults
    └── {feature}.py      # Request builders and response decoders

Request builders return the raw ``requests.Response``; decoders take that
response, validate it (``walkalytics.validation``) and turn the payload
into grids or row tables.
"""
