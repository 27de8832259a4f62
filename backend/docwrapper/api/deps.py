from typing import Annotated

from fastapi import Depends, Request

from docwrapper.core.pool import PoolManager


def get_pool_manager(request: Request) -> PoolManager:
    return request.app.state.pool_manager


PoolDep = Annotated[PoolManager, Depends(get_pool_manager)]
