"""
Word-document export boundary.

Design intent:
- Tokenize the minutes markdown subset independently from document rendering.
- Render with python-docx and return raw `.docx` bytes to the API layer.
"""
