"""
API orchestration boundary for the meeting-minutes backend.

Design intent:
- Expose thin, typed endpoints for transcribe/minutes/export flows.
- Keep request validation explicit and failure modes predictable.
- Orchestrate modules without embedding domain logic in routers.
"""
