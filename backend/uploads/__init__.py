"""
Raw request-body handling for file uploads.

Design intent:
- Parse multipart bodies on raw bytes so audio payloads are never re-encoded.
- Keep header tokenizing separate and testable without the HTTP layer.
"""
