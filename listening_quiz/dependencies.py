from fastapi import Depends, HTTPException, Request

from listening_quiz.services.runtime import RuntimeController


def get_runtime(request: Request) -> RuntimeController:
    return request.app.state.runtime


def require_admin(runtime: RuntimeController = Depends(get_runtime)) -> RuntimeController:
    if not runtime.admin_mode:
        raise HTTPException(status_code=403, detail="Admin mode is locked")
    return runtime
