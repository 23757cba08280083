"""Task Registry — authoritative name -> TaskDescriptor mapping.

Invariants:
    - Names are unique keys; a later registration with the same name replaces
      the earlier one (last-write-wins) and keeps the original ordering slot
    - list_tasks() is deterministic: registration order
    - lookup() is a pure read — never raises, never mutates
    - Populated once at startup, read-only while dispatching (no locks needed)

Design Decisions:
    - Explicit (name, description, handler) table over decorator/getattr discovery:
      every registration is visible in one place
    - Duplicate names logged as a warning but not rejected: keeps the
      overwrite policy observable without changing it
"""

import logging
from typing import Iterable

from jobrunner.core.domain_types import TaskDescriptor, TaskHandler, TaskName

logger = logging.getLogger(__name__)

TaskEntry = tuple[str, str, TaskHandler]


class TaskRegistry:
    """Holds the invocable tasks. Insertion-ordered dict underneath."""

    def __init__(self):
        self._tasks: dict[TaskName, TaskDescriptor] = {}

    def register(self, descriptor: TaskDescriptor) -> None:
        """Add or replace the entry for descriptor.name."""
        if descriptor.name in self._tasks:
            logger.warning(
                f"Task '{descriptor.name}' already registered — replacing",
                extra={"task_name": descriptor.name},
            )
        self._tasks[descriptor.name] = descriptor
        logger.info(
            f"Registered task: {descriptor.name}",
            extra={"task_name": descriptor.name},
        )

    def register_handler(
        self, name: str, handler: TaskHandler, description: str = "",
    ) -> TaskDescriptor:
        descriptor = TaskDescriptor(
            name=TaskName(name), description=description, handler=handler,
        )
        self.register(descriptor)
        return descriptor

    def list_tasks(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._tasks)

    def lookup(self, name: str) -> TaskDescriptor | None:
        return self._tasks.get(TaskName(name))

    def descriptors(self) -> list[TaskDescriptor]:
        return list(self._tasks.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)


def build_registry(entries: Iterable[TaskEntry]) -> TaskRegistry:
    """Build a registry from a static table of (name, description, handler)."""
    registry = TaskRegistry()
    for name, description, handler in entries:
        registry.register_handler(name, handler, description)
    return registry
