"""
Account services: tokens, users and notifications.
"""
