# -*- coding: utf-8 -*-
from fastapi import APIRouter

from .providers import router as providers_router
from .settings import router as settings_router

router = APIRouter(prefix="/copilot")
router.include_router(providers_router)
router.include_router(settings_router)

__all__ = ["router"]
