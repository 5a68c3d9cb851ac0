"""
Siraw Links - Store Session
============================
Establishes the authenticated store handle the counter needs before it
can run. Credentials are tried in order: Streamlit secrets, a service
account key file, then application default credentials.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import structlog

from .config import Settings
from .document_store import DocumentStore, FirestoreDocumentStore, MemoryDocumentStore

logger = structlog.get_logger()

FIRESTORE_SCOPES = ['https://www.googleapis.com/auth/datastore']
SECRETS_SECTION = 'firebase_service_account'


@dataclass
class StoreSession:
    """Readiness signal plus the store handle, once a session exists."""

    ready: bool
    store: Optional[DocumentStore] = None
    method: Optional[str] = None
    error: Optional[str] = None


def _firestore_client(credentials=None, project: Optional[str] = None):
    from google.cloud import firestore

    if credentials is not None:
        return firestore.Client(project=project, credentials=credentials)
    return firestore.Client(project=project)


def _connect_firestore(settings: Settings, secrets: Optional[Mapping[str, Any]]) -> tuple:
    """
    Build a Firestore client from the first credentials source that works.

    Returns:
        Tuple of (client, method name)
    """
    import google.oauth2.service_account

    project = settings.firebase_project

    # Streamlit secrets first
    if secrets is not None and SECRETS_SECTION in secrets:
        creds_data = dict(secrets[SECRETS_SECTION])
        credentials = google.oauth2.service_account.Credentials.from_service_account_info(
            creds_data,
            scopes=FIRESTORE_SCOPES
        )
        return _firestore_client(credentials, project or creds_data.get('project_id')), 'streamlit_secrets'

    if settings.credentials_file:
        credentials = google.oauth2.service_account.Credentials.from_service_account_file(
            settings.credentials_file,
            scopes=FIRESTORE_SCOPES
        )
        return _firestore_client(credentials, project or credentials.project_id), 'service_account_file'

    return _firestore_client(project=project), 'default'


def establish_session(
    settings: Settings,
    secrets: Optional[Mapping[str, Any]] = None,
    memory_store: Optional[MemoryDocumentStore] = None,
    probe_path: Optional[str] = None,
) -> StoreSession:
    """
    Establish the store session. Never raises.

    Args:
        settings: Application settings
        secrets: Streamlit secrets mapping, if any
        memory_store: Store to hand out for the ``memory`` backend
        probe_path: Document read once to prove the connection works

    Returns:
        StoreSession, with ``ready`` False and ``error`` set on failure
    """
    backend = settings.store_backend

    if backend == 'memory':
        return StoreSession(True, memory_store or MemoryDocumentStore(), 'memory')

    if backend != 'firestore':
        logger.error("Unknown store backend", backend=backend)
        return StoreSession(False, error=f"Unknown store backend: {backend}")

    try:
        client, method = _connect_firestore(settings, secrets)
        store = FirestoreDocumentStore(client)
        if probe_path:
            store.get(probe_path)
    except Exception as e:
        logger.error("Store session failed", backend=backend, error=str(e))
        return StoreSession(False, error=f"Store connection failed: {str(e)[:200]}")

    logger.info("Store session ready", backend=backend, method=method)
    return StoreSession(True, store, method)
