"""Gallery core package.

Modules:
- scanner: one-shot filesystem walk that builds the catalog
- catalog: in-memory category map and page slicing
- web: FastAPI app, home page and pagination API
- config: INI parsing and config object
"""
