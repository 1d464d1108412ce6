"""
services/ - Business Logic Layer
================================
Services validate input, enforce preconditions through the repositories
and turn every outcome into a user-facing reply.
"""
