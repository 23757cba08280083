"""Task Runtime — builds the process-wide dispatcher from the built-in task table.

Invariants:
    - Registry is fully populated before the dispatcher is returned
    - get_dispatcher() is cached — one registry/dispatcher per process

Design Decisions:
    - Explicit construction + injection (TaskDispatcher(registry)): no hidden
      singleton inside the dispatcher itself; the cache lives at the edge
    - Routes depend on get_dispatcher so tests can override it
"""

from functools import lru_cache

from jobrunner.config import Settings, get_settings
from jobrunner.services.handle_builtin_tasks import BUILTIN_TASKS
from jobrunner.services.task_dispatch import TaskDispatcher
from jobrunner.services.task_registry import build_registry


def build_dispatcher(settings: Settings) -> TaskDispatcher:
    registry = build_registry(BUILTIN_TASKS)
    return TaskDispatcher(
        registry,
        strict_argument_decoding=settings.strict_argument_decoding,
    )


@lru_cache
def get_dispatcher() -> TaskDispatcher:
    return build_dispatcher(get_settings())
