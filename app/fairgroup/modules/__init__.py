"""
Feature modules live under this package.

Each module owns its models, service functions and JSON blueprint, while reusing
platform primitives (session context, access predicates, errors, DB session).
"""
