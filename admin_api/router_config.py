# admin_api/router_config.py
"""
Router configuration for the Admin API
Centralized router management separated from main.py
"""

def setup_routers(app):
    """Configure all application routers"""

    from .src.auth.routes import router as auth_router
    from .src.admin.routes import router as admin_router

    # Authentication
    app.include_router(auth_router, tags=["Authentication"])

    # Admin management
    app.include_router(admin_router, tags=["Admins"])

    return app
