from fastapi import APIRouter
from rxguard.api.v1.endpoints import interactions, prescriptions

"""
API 路由汇总 (API Router Aggregator)
将所有 V1 版本的子路由统一通过 include_router 注册到根路由下。
"""
api_router = APIRouter()
api_router.include_router(interactions.router, prefix="/interactions", tags=["interactions"])
api_router.include_router(prescriptions.router, prefix="/prescriptions", tags=["prescriptions"])
