"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Pick the directory reviews most relevant to what the user searched.
- Call the Groq LLM for a short Spanish summary of those reviews.
"""
