"""
Meeting-minutes backend package.

Design intent:
- Glue hosted transcription and chat APIs to a Word exporter behind thin HTTP handlers.
- Keep parsing modules (uploads/minutes/export) independent from the HTTP layer.
"""
