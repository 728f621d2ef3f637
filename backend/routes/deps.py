from fastapi import Request

from gemini.fallback import FallbackCaller


def get_caller(request: Request) -> FallbackCaller:
    """The FallbackCaller built by create_app() for this process."""
    return request.app.state.caller
