"""Squad Assistant Backend - Battle Report Analysis API.

This package provides a hexagonal architecture implementation for
analyzing stored battle reports with the ``squad`` analysis package.

Layers:
- domain: Value objects shared across layers
- application: Use cases and port interfaces
- infrastructure: Adapters for report storage
- api: REST and WebSocket endpoints
"""

__version__ = "1.0.0"
