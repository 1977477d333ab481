from fastapi import Request
from rgbtone.internal.app_context import AppContext


def get_context(request: Request) -> AppContext:
    return request.app.state.context
