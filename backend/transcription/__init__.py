"""
Speech-to-text collaborator.

Design intent:
- Forward uploaded audio bytes to the hosted transcription API unchanged.
- Surface vendor failures with their own status and message.
"""
