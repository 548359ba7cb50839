"""
services - Business-logic layer sitting between API/UI and DB.
"""

from services.contacts_service import ContactsService, ContactValidationError   # noqa: F401
from services.contact_list import ContactListView                               # noqa: F401
from services.notifications import NotificationChannel, CONTACT_CHANGED         # noqa: F401
from services.staging_store import StagingStore, StagedUpload                   # noqa: F401
from services.import_wizard import ImportWizard, stage_upload                   # noqa: F401
