"""Employee Portal — FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from employee_portal.attendance.router import router as attendance_router
from employee_portal.common.exceptions import register_exception_handlers
from employee_portal.common.logging import configure_logging
from employee_portal.common.rate_limit import limiter, rate_limit_exceeded_handler
from employee_portal.config import settings
from employee_portal.core_hr.router import router as profile_router
from employee_portal.dashboard.router import router as dashboard_router
from employee_portal.leave.router import router as leave_router
from employee_portal.notifications.router import (
    employee_router as employee_notifications_router,
    router as notifications_router,
)
from employee_portal.payroll.router import router as payroll_router
from employee_portal.performance.router import router as performance_router

API_PREFIX = "/api/v1"
VERSION = "1.0.0"

# Routers whose paths all start with /{employee_id}
EMPLOYEE_ROUTERS = [
    (dashboard_router, "dashboard"),
    (profile_router, "profile"),
    (leave_router, "leave"),
    (attendance_router, "attendance"),
    (performance_router, "performance"),
    (payroll_router, "payroll"),
    (employee_notifications_router, "notifications"),
]


def create_app() -> FastAPI:
    """Build the portal app: logging, error handlers, limits, CORS, routes."""
    configure_logging()

    show_docs = settings.ENVIRONMENT != "production"
    app = FastAPI(
        title="Employee Portal",
        description="Employee self-service: leave, attendance, payslips, KPIs, notifications",
        version=VERSION,
        docs_url=f"{API_PREFIX}/docs" if show_docs else None,
        redoc_url=f"{API_PREFIX}/redoc" if show_docs else None,
    )

    register_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    @app.get(f"{API_PREFIX}/health", tags=["system"])
    async def health_check():
        return {"status": "healthy", "version": VERSION, "environment": settings.ENVIRONMENT}

    for router, tag in EMPLOYEE_ROUTERS:
        app.include_router(router, prefix=f"{API_PREFIX}/employees", tags=[tag])
    app.include_router(notifications_router, prefix=f"{API_PREFIX}/notifications", tags=["notifications"])

    return app


app = create_app()
