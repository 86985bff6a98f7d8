"""
Test suite for the Todo Manager application.

This package contains:
- unit/: model and request-helper logic
- integration/: HTTP flows through the Flask test client
- security/: CSRF, session and ownership boundaries
- smoke/: the app starts and answers
"""
