"""Built-in Tasks — the demo and maintenance jobs shipped with the service.

Invariants:
    - Every handler is async and returns nothing the dispatcher relies on
    - BUILTIN_TASKS is the single registration table (name, description, handler)

Design Decisions:
    - Job bodies are stubs that only log: temp cleanup, monitoring and backups
      belong to external collaborators
"""

import logging

logger = logging.getLogger(__name__)


async def run_no_params() -> None:
    logger.info("Running no-params example task")


async def run_params(param1: str, param2: int, param3: bool) -> None:
    logger.info(
        f"Running params example task: param1={param1!r}, "
        f"param2={param2!r}, param3={param3!r}",
    )


async def clear_temp() -> None:
    logger.info("Running temp file cleanup task")


async def monitor_system() -> None:
    logger.info("Running system monitoring task")


async def backup_database() -> None:
    logger.info("Running database backup task")


BUILTIN_TASKS = [
    ("noParams", "No-params example task", run_no_params),
    ("params", "Params example task", run_params),
    ("clearTemp", "Clear temporary files", clear_temp),
    ("monitorSystem", "System status monitoring", monitor_system),
    ("backupDatabase", "Database backup", backup_database),
]
