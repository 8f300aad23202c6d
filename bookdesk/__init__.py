"""
bookdesk: client core for the remote books service.

Talks to the books REST API, tracks pagination and search state, and
decodes server-side validation errors onto the four form fields.
"""

__version__ = "1.0.0"
