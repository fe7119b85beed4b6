"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  API handlers
call services and translate their exceptions into HTTP responses;
services never talk HTTP themselves.
"""
