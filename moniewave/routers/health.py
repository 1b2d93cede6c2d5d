"""
Health Router: readiness and registry status.
"""
from fastapi import APIRouter, Request, Response, status

router = APIRouter()


@router.get("/health")
async def health_check(request: Request, response: Response):
    """
    Report readiness and the number of registered tools.
    Returns 503 until startup has built the registry (Readiness Probe).
    """
    if not getattr(request.app.state, "is_ready", False):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "initializing", "message": "Application is starting up"}

    registry = request.app.state.registry
    client = registry.client
    health_status = {
        "status": "healthy",
        "tools": len(registry),
        "services": {"paystack_client": "closed" if client.is_closed else "open"},
    }
    if client.is_closed:
        health_status["status"] = "degraded"
    return health_status
