"""Example: use the settings service and the management table without Flask.

Controllers are only a thin layer; the table logic runs the same from a script.
"""

import asyncio
import importlib

from config import get_settings_module

from src.hr_dashboard.hr_dashboard.container import build_container
from src.hr_dashboard.hr_dashboard.tables.management import ManagementTable
from src.hr_dashboard.hr_dashboard.tables.notify import CollectingNotifier


async def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG)
    service = container.settings_service
    resource = service.resource("technologies")

    table = ManagementTable(
        title=resource.title,
        items=service.list(resource.name),
        fields=resource.fields,
        on_add=lambda data: service.create(resource.name, data),
        on_edit=lambda rid, data: service.update(resource.name, rid, data, current=table.find(rid)),
        on_delete=lambda rid: service.delete(resource.name, rid),
        notifier=CollectingNotifier(),
    )
    table.open_add()
    table.set_field("name", "FastAPI")
    await table.submit()
    print([t.description for t in table.notifier.toasts])

    for row in table.table().page_rows():
        print(row)


if __name__ == "__main__":
    asyncio.run(main())
