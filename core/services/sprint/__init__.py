from .service import SprintService

__all__ = ["SprintService"]
