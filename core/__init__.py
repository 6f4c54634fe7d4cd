"""Core application for the hospital dashboard backend.

Models, input serializers, reporting services, views and routes for the
patient, billing and staff endpoints the dashboard consumes.
"""
