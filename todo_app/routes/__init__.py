"""
Routes package for the Todo Manager application.

This package contains route blueprints:
- auth: signup, login and logout pages and form handlers
- todos: to-do listing and ownership-scoped mutations (HTML or JSON)
- health: deployment health check
- errors: application-wide error handlers
"""
