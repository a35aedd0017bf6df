"""Mindful Heaven.

Backend service and Python client for an anonymous mental-health support
application.

High-level architecture
-----------------------

The service owns the four concerns a browser client needs: identity,
relational storage, object storage, and relays to third-party HTTP APIs.

Core subpackages
----------------

- ``mindful_heaven.core``:

  - Logging and optional Logfire monitoring.
  - Security primitives (password hashing, security-answer hashing, tokens).
  - SQLModel entities and async repositories.
  - Pydantic I/O models shared by the server and the client.

- ``mindful_heaven.server``:

  - The FastAPI application, its routers and service layer.
  - The chat-completion relay and both password-reset flows.

- ``mindful_heaven.client``:

  - An incremental Server-Sent-Events decoder for relay streams.
  - A chat client that turns a relay stream into a transcript.
  - The security-question password reset state machine.
"""
