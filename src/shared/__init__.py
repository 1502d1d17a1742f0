"""Fleet Monitor Shared Package.

This package contains shared components used by the fleet monitor service:
- models: Pydantic data models
- config: Configuration management
- observability: Structured logging
"""

__version__ = "0.1.0"
