"""
Демонстрація клієнта: перелік РЕМів і всі актуальні відключення одного РЕМу

    python -m hoe_api --pem 21
"""

import argparse
import asyncio
import logging
import sys
import time

from hoe_api.client import create_client
from hoe_api.config import settings
from hoe_api.result import Error, Ok


async def run(pem_id: str) -> int:
    async with create_client(settings) as client:
        match await client.fetch_all_pems():
            case Ok(value=pems):
                print("РЕМи:")
                for pem in pems:
                    print(f"- {pem.name} ({pem.id})")
                print()
            case Error() as error:
                print(f"❌ Не вдалося отримати РЕМи: {error}")

        started = time.perf_counter()
        result = await client.fetch_all_actual_power_cuts(pem_id)
        duration = time.perf_counter() - started
        print(f"Час виконання: {duration:.2f}s")
        print()

        match result:
            case Error() as error:
                print(f"❌ {error}")
                return 1
            case Ok(value=events):
                for event in events:
                    print(f"Населений пункт: {event.settlement}")
                    print(f"РЕМ: {event.pem.name}")
                    print(f"Тип: {event.type.type_name}")
                    print(f"Вид робіт: {event.type_of_work}")
                    print(f"Створено: {event.created_at}")
                    print(f"Початок (орієнтовно): {event.estimated_start_time}")
                    print(f"Відновлення (орієнтовно): {event.estimated_end_time}")
                    print("Вулиці:")
                    for group in event.street_groups:
                        print(f"    {group.street} {', '.join(sorted(group.house_numbers))}")
                    print()
                print(f"Загалом отримано {len(events)} відключень")
                return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Відключення електроенергії hoe.com.ua")
    parser.add_argument("--pem", default="21", help="ID РЕМу (за замовчуванням 21 - Хмельницький РЕМ)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return asyncio.run(run(args.pem))


if __name__ == "__main__":
    sys.exit(main())
