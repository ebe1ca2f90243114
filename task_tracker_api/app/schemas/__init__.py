"""
Pydantic schema definitions for API payloads.

Each resource (projects, tasks) defines its own Pydantic models for
request and response bodies.  Schemas are separated from the SQL in
the repositories to decouple API representation from persistence.
"""
