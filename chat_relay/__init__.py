"""
Perplexity chat relay.

Package layout by responsibility:
- api/       : FastAPI app, routes, dependencies
- core/      : Configuration, logging, exceptions, validation, middleware
- services/  : Chat exchange orchestration
- llm/       : Upstream client, prompt and model catalog
- models/    : Pydantic request/response schemas
"""
__version__ = "1.0.0"
