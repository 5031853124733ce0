"""
FastAPI application for tasklist.

API Endpoints:
- GET /api/tasks - List all tasks
- GET /api/tasks/{id} - Get one task
- POST /api/tasks - Create a task
- PUT /api/tasks/{id} - Partially update a task
- DELETE /api/tasks/{id} - Delete a task

Usage:
    # Run the server
    uvicorn tasklist.core.api.app:create_app --factory --reload

    # Or from Python
    from tasklist.core.api import create_app
"""

from tasklist.core.api.app import create_app

__all__ = ["create_app"]
