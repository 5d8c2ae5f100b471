from src.routers.healthz import router as healthz

__all__ = [
    "healthz",
]
