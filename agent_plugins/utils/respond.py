# agent_plugins/utils/respond.py
from typing import Any, Callable, Optional

from agent_plugins.models import ActionResponse

Callback = Callable[[ActionResponse], Any]


def emit(callback: Optional[Callback], text: str, type: str = "success", data: Any = None) -> ActionResponse:
    """Build an ActionResponse and hand it to the callback, if any."""
    resp = ActionResponse(text=text, type=type, data=data)
    if callback is not None:
        callback(resp)
    return resp
