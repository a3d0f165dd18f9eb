# app/celery_app.py
import os
from celery import Celery
from dotenv import load_dotenv

from app.core.logging_config import configure_logging

load_dotenv()

# Ensure logging is configured in worker processes as early as possible.
configure_logging()

BROKER_URL = os.environ.get("REDIS_BROKER_URL", "redis://localhost:6379/0")
BACKEND_URL = os.environ.get("CELERY_RESULT_BACKEND", BROKER_URL)

celery_app = Celery(
    "competency_sync",
    broker=BROKER_URL,
    backend=BACKEND_URL,
    include=["app.tasks.sync_tasks"],
)

celery_app.conf.task_acks_late = True
celery_app.conf.worker_prefetch_multiplier = 1
celery_app.conf.task_reject_on_worker_lost = True

# prevent Celery from overriding our root logger
celery_app.conf.worker_hijack_root_logger = False

# Sync runs are on demand only (no beat schedule).
celery_app.conf.task_routes = {
    "app.tasks.sync_tasks.sync_source_task": {"queue": "sync_q"},
    "app.tasks.sync_tasks.sync_all_sources_task": {"queue": "sync_q"},
}
