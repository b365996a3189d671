# Schemas package init
"""
Routedoc — Schemas Package
============================

What:  Payload models (pydantic) and their documentation descriptors.

    - petstore.py: Pet, Category, Order, User and matching TypeDescriptors
    - errors.py:   ErrorResponse, the body of every error reply
"""
