"""
services.registry - Per-app wiring of the stateful collaborators.

create_app() builds one ServiceRegistry and stores it on
app.extensions; routes reach it through get_services().
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from flask import current_app

from services.contact_list import ContactListView
from services.import_wizard import ImportWizard
from services.notifications import NotificationChannel
from services.staging_store import StagingStore

EXTENSION_KEY = "cedb"


@dataclass
class ServiceRegistry:
    store: StagingStore
    channel: NotificationChannel
    contact_list: ContactListView
    wizard: ImportWizard


def build_registry(
    staging_dir: str | Path,
    *,
    quota_bytes: Optional[int] = None,
    dry_run: bool = False,
    delay: float = 0.0,
) -> ServiceRegistry:
    store = StagingStore(staging_dir, quota_bytes=quota_bytes)
    channel = NotificationChannel()
    return ServiceRegistry(
        store=store,
        channel=channel,
        contact_list=ContactListView(channel),
        wizard=ImportWizard(store, channel, dry_run=dry_run, delay=delay),
    )


def get_services() -> ServiceRegistry:
    return current_app.extensions[EXTENSION_KEY]
