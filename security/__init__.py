"""
security/ - Access Control
==========================
Whitelisting, admin checks and rate limiting applied to Telegram handlers.
"""
