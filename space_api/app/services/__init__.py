"""
Service layer abstraction.

Business logic lives here: payload validation, rating derivation,
filter composition and the ship service that ties them to the
repository.  API handlers only translate HTTP to service calls.
"""
