"""
Events and contact-mail backend.

This package provides a FastAPI application that stores reminder events in
Cloud Firestore and relays contact messages through Mailgun, with in-memory
stand-ins for both services for local runs and tests.
"""
