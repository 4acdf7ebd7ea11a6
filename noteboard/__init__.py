"""
Noteboard.

Home screen of a note-taking client: a searchable, pin-ordered note list
with multi-select deletion, backed by a remote notes API.

- core/: Configuration, logging, exceptions, resilience
- schemas/: Pydantic note models and transport payloads
- client/: HTTP client and remote note store (httpx)
- home/: List store, selection controller, mutation coordinator
- tui/: Terminal front-end (Textual)
"""
