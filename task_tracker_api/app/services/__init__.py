"""
Service layer abstraction.

Each service encapsulates business logic for a resource: it validates
input, enforces project ownership and turns storage outcomes into
domain errors.  Repository calls run in worker threads so a cancelled
request stops waiting on the store.
"""
