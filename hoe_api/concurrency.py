"""
Паралельне виконання незалежних задач з зупинкою на першій помилці
"""

import asyncio
from typing import Any, Awaitable, List


async def gather_fail_fast(*awaitables: Awaitable[Any]) -> List[Any]:
    """
    Запускає задачі в одній TaskGroup і повертає результати в порядку аргументів

    Перша помилка скасовує решту задач і піднімається як є (без ExceptionGroup).
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_awaited(item)) for item in awaitables]
    except ExceptionGroup as eg:
        raise eg.exceptions[0]
    return [task.result() for task in tasks]


async def _awaited(item: Awaitable[Any]) -> Any:
    return await item
