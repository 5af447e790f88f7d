from fastapi import APIRouter

from app.api.accruals import accrual_trigger_router
from app.api.balances import adjustment_router, employee_balance_router
from app.api.leaves import leaves_router
from app.api.rates import rates_router

api_router = APIRouter()
api_router.include_router(leaves_router)
api_router.include_router(employee_balance_router)
api_router.include_router(adjustment_router)
api_router.include_router(rates_router)
api_router.include_router(accrual_trigger_router)
