"""
Server-rendered todo list.

The FastAPI application is built by ``todo_web.main.create_app``; the store
lives in ``todo_web.store`` and the HTML handlers in ``todo_web.routers``.
"""

__version__ = "0.1.0"
