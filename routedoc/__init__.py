"""
Routedoc — Package Initializer
================================

What:  Self-describing HTTP routes, served as the Swagger Petstore API.

Architecture Note:

    ┌─────────────────────────────────────┐
    │     main.py / cli.py (Transport)    │  ← FastAPI app, uvicorn, CLI
    ├─────────────────────────────────────┤
    │     routes/ (Route Declarations)    │  ← pet, store, user stubs
    ├─────────────────────────────────────┤
    │     schemas/ (Payloads)             │  ← pydantic models + descriptors
    ├─────────────────────────────────────┤
    │     core/ (Routing Core)            │  ← combinators, binders, docs,
    │                                     │    aggregator, dispatcher
    └─────────────────────────────────────┘

    The core does not import FastAPI; it can be dispatched and documented
    without an HTTP server.
"""

__version__ = "1.0.0"
